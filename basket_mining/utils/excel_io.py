import logging
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Any, Optional, Union

import pandas as pd

from basket_mining.transactions import Itemset, Rule, TransactionStore, itemsets_to_frame

logger = logging.getLogger(__name__)


def _xlsx_path(output_path: Union[str, Path]) -> Path:
    output_path = Path(output_path)
    if output_path.suffix != '.xlsx':
        output_path = output_path.with_suffix('.xlsx')
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def _key_value_frame(data: Dict[str, Any], key_name: str) -> pd.DataFrame:
    return pd.DataFrame({key_name: list(data), 'Value': [str(v) for v in data.values()]})


def save_mining_results(
    itemsets: List[Itemset],
    rules: List[Rule],
    stats: Dict[str, Any],
    output_path: Union[str, Path],
    parameters: Dict[str, Any] = None,
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Write itemsets, rules and run statistics to one workbook.

    Sheets:
        - Itemsets: one row per itemset, items joined with " AND " (if any)
        - Rules: one row per rule, see format_rule_for_excel (if any)
        - Summary: run statistics followed by metadata
        - Parameters: mining parameters (if given)

    Args:
        stats: Flat statistics dictionary, see flatten_stats
        output_path: Target file; the .xlsx suffix is added when missing
        metadata: Extra summary rows such as dataset name or size
    """
    output_path = _xlsx_path(output_path)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        if itemsets:
            itemsets_df = itemsets_to_frame(itemsets)
            itemsets_df['items'] = itemsets_df['items'].apply(' AND '.join)
            itemsets_df.to_excel(writer, sheet_name='Itemsets', index=False)

        if rules:
            pd.DataFrame([format_rule_for_excel(r) for r in rules]).to_excel(
                writer, sheet_name='Rules', index=False
            )

        summary = {**stats, **(metadata or {})}
        _key_value_frame(summary, 'Metric').to_excel(writer, sheet_name='Summary', index=False)

        if parameters:
            _key_value_frame(parameters, 'Parameter').to_excel(writer, sheet_name='Parameters', index=False)

    logger.info("Mining results saved to: %s", output_path)
    return output_path


def save_basket_profile(
    store: TransactionStore,
    output_path: Union[str, Path],
    top_n: Optional[int] = None
) -> Path:
    """
    Write the descriptive side of a basket analysis to Excel.

    Sheets:
        - Basket Sizes: number of transactions per basket size
        - Item Frequencies: count and support per item, most frequent first
    """
    output_path = _xlsx_path(output_path)

    sizes = store.basket_sizes().value_counts().sort_index()
    sizes_df = sizes.rename_axis('basket_size').reset_index(name='transactions')

    counts = store.item_frequencies(top_n=top_n, relative=False)
    items_df = counts.rename_axis('item').reset_index()
    items_df['support'] = items_df['count'] / len(store) if len(store) else 0.0

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        sizes_df.to_excel(writer, sheet_name='Basket Sizes', index=False)
        items_df.to_excel(writer, sheet_name='Item Frequencies', index=False)

    logger.info("Basket profile saved to: %s", output_path)
    return output_path


def format_rule_for_excel(rule: Rule) -> Dict[str, Any]:
    """
    Flatten a rule for spreadsheet output.

    Antecedents and consequents become "item1 AND item2" strings, parseable by
    splitting on " AND ".
    """
    formatted = rule.to_dict()
    formatted['antecedents'] = ' AND '.join(formatted['antecedents'])
    formatted['consequents'] = ' AND '.join(formatted['consequents'])
    return formatted


def save_rules_text(
    rules: List[Rule],
    output_path: Union[str, Path],
    title: str = "MINED RULES",
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save rules in human-readable text format.

    Args:
        rules: Rules to write, in the order given
        output_path: Output file path (will add .txt if needed)
        title: Title for the output file header
        metadata: Optional metadata to include in header
    """
    output_path = Path(output_path)
    if output_path.suffix != '.txt':
        output_path = output_path.with_suffix('.txt')
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        f.write("=" * 80 + "\n")
        f.write(f"{title}\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if metadata:
            for key, val in metadata.items():
                f.write(f"{key}: {val}\n")
        f.write("=" * 80 + "\n\n")

        if not rules:
            f.write("No rules found.\n")
        else:
            for i, rule in enumerate(rules, 1):
                _write_rule(f, rule, i)

            f.write("=" * 80 + "\n")
            f.write(f"Total rules: {len(rules)}\n")
            f.write("=" * 80 + "\n")

    logger.info("Rules saved to: %s", output_path)
    return output_path


def _write_rule(f, rule: Rule, rule_num: int):
    f.write(f"Rule #{rule_num}:\n")
    f.write(f"  IF {' AND '.join(sorted(rule.lhs))}\n")
    f.write(f"  THEN {' AND '.join(sorted(rule.rhs))}\n\n")
    f.write("  Metrics:\n")

    metrics = [
        ('support', 'Support'),
        ('confidence', 'Confidence'),
        ('lift', 'Lift'),
        ('coverage', 'Coverage'),
    ]
    for key, label in metrics:
        f.write(f"    {label:18s} {getattr(rule, key):.4f}\n")
    f.write(f"    {'Count':18s} {rule.count}\n")
    f.write("\n")
