import logging
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Tuple

import pandas as pd

from basket_mining.exceptions import InvalidInputError, InvalidParameterError
from basket_mining.transactions import TransactionStore, Itemset, Rule
from basket_mining.rule_mining import EclatMiner, MLxtendMiner, RuleGenerator, AssociationRuleMiner
from basket_mining.postprocessing import (
    filter_rules,
    filter_itemsets,
    filter_significant,
    filter_maximal,
    count_non_maximal
)
from basket_mining.postprocessing.rule import ITEMSET_METRICS

from .config import DataConfig, RuleMiningConfig, FilterConfig, ExperimentConfig

logger = logging.getLogger(__name__)

MODES = ['rules', 'itemsets', 'both']


def load_data(config: DataConfig) -> TransactionStore:
    path = Path(config.path)
    if path.suffix in ['.csv', '.txt']:
        df = pd.read_csv(path, sep=config.sep)
    elif path.suffix in ['.xlsx', '.xls']:
        df = pd.read_excel(path)
    elif path.suffix == '.parquet':
        df = pd.read_parquet(path)
    else:
        raise InvalidInputError(f"Unsupported file format: {path.suffix}")

    return TransactionStore.from_frame(df, config.transaction_col, config.item_col)


def create_miner(config: RuleMiningConfig):
    miner_type = config.miner_type.lower()
    cfg = config.miner_config

    if miner_type == 'eclat':
        return EclatMiner(
            min_support=cfg.min_support,
            min_len=cfg.min_len,
            max_len=cfg.max_len
        )

    elif miner_type == 'mlxtend':
        return MLxtendMiner(
            algorithm=cfg.algorithm,
            min_support=cfg.min_support,
            min_confidence=config.rules.min_confidence,
            min_len=cfg.min_len,
            max_len=cfg.max_len
        )

    else:
        raise InvalidParameterError(f"Unknown miner type: {miner_type}")


def apply_filters(rules: List[Rule], filters: List[FilterConfig]) -> List[Rule]:
    result = rules
    for f in filters:
        result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
    return result


def apply_itemset_filters(itemsets: List[Itemset], filters: List[FilterConfig]) -> List[Itemset]:
    result = itemsets
    for f in filters:
        if f.metric in ITEMSET_METRICS:
            result, _ = filter_itemsets(result, criterion=f.metric, threshold=f.threshold)
    return result


def _generate_rules(
    miner,
    store: TransactionStore,
    itemsets: List[Itemset],
    config: RuleMiningConfig
) -> Tuple[List[Rule], Dict[str, Any]]:
    if isinstance(miner, AssociationRuleMiner):
        rules, stats = miner.mine_rules(store)
        rules = [r for r in rules if len(r.items) >= config.rules.min_len]
        stats['num_rules'] = len(rules)
        return rules, stats

    # Rule generation needs the supports of every subset, singletons included
    if miner.min_len > 1:
        itemsets = EclatMiner(miner.min_support, 1, miner.max_len).mine(store)

    generator = RuleGenerator(
        min_confidence=config.rules.min_confidence,
        min_len=config.rules.min_len
    )
    return generator.generate_rules(itemsets)


def run_rule_mining(
    store: TransactionStore,
    config: RuleMiningConfig
) -> Tuple[List[Itemset], List[Rule], Dict[str, Any]]:
    """
    Mine itemsets and/or rules from a store and apply the configured filters.

    Filtering order: metric filters, significance test, maximality.

    Returns:
        Tuple of (itemsets, rules, stats); the list not asked for by
        config.mode is empty
    """
    if config.mode not in MODES:
        raise InvalidParameterError(f"Mode must be one of {MODES}, got '{config.mode}'")

    miner = create_miner(config)
    mode = config.mode
    stats = {}

    mined_itemsets, itemset_stats = miner.mine_itemsets(store)

    itemsets = []
    if mode in ['itemsets', 'both']:
        itemsets = apply_itemset_filters(mined_itemsets, config.filters)
        stats['itemsets'] = itemset_stats
        stats['itemsets']['count'] = len(itemsets)

    rules = []
    if mode in ['rules', 'both']:
        rules, rule_stats = _generate_rules(miner, store, mined_itemsets, config)
        rules = apply_filters(rules, config.filters)

        if rules and config.significance is not None:
            rules = filter_significant(
                rules, store,
                alpha=config.significance.alpha,
                adjust=config.significance.adjust
            )
            rule_stats['num_significant'] = len(rules)

        if rules:
            rule_stats['num_non_maximal'] = count_non_maximal(rules)
            if config.maximal_only:
                rules = filter_maximal(rules)

        stats['rules'] = rule_stats
        stats['rules']['count'] = len(rules)

    logger.info("Mining run finished: %d itemsets, %d rules", len(itemsets), len(rules))
    return itemsets, rules, stats


def flatten_stats(stats: Dict[str, Any]) -> Dict[str, Any]:
    flat = {}
    for section, values in stats.items():
        if isinstance(values, dict):
            for key, value in values.items():
                flat[f"{section}.{key}"] = value
        else:
            flat[section] = values
    return flat


def generate_output_filename(config: ExperimentConfig, suffix: str = '') -> Path:
    """
    Timestamped output path inside the experiment's output directory:
    <output_dir>/<timestamp>_<experiment>_<miner>_<mode>_<dataset>[_<suffix>]
    """
    parts = [
        datetime.now().strftime('%Y%m%d_%H%M%S'),
        config.name,
        config.mining.miner_type,
        config.mining.mode,
        config.data.name
    ]
    if suffix:
        parts.append(suffix)
    return config.get_output_path() / '_'.join(parts)
