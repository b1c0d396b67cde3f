"""
Market Basket Analysis Experiment

Loads (transaction, item) rows, summarises basket sizes and item
frequencies, mines frequent itemsets with ECLAT, derives rules and keeps the
significant, maximal ones. Rules are also mined with mlxtend's Apriori for
comparison.
"""
import logging
from datetime import datetime

from basket_mining.experiments.base import (
    load_data, run_rule_mining, flatten_stats, generate_output_filename
)
from basket_mining.experiments.config import (
    DataConfig, EclatConfig, MLxtendConfig, RuleConfig, RuleMiningConfig,
    SignificanceConfig, ExperimentConfig
)
from basket_mining.postprocessing import top_rules
from basket_mining.transactions import itemsets_to_frame, rules_to_frame
from basket_mining.utils import (
    save_mining_results, save_basket_profile, save_rules_text, setup_logging
)

setup_logging(logging.INFO)

# =============================================================================
# CONFIGURATION
# =============================================================================

EXPERIMENT = ExperimentConfig(
    name="groceries",
    data=DataConfig(
        path="../../data/raw/groceries.csv",
        name="groceries",
        transaction_col="transaction_id",
        item_col="item"
    ),
    mining=RuleMiningConfig(
        miner_type='eclat',
        miner_config=EclatConfig(min_support=0.001, min_len=1, max_len=4),
        rules=RuleConfig(min_confidence=0.5, min_len=2),
        significance=SignificanceConfig(alpha=0.05, adjust='none'),
        maximal_only=True
    ),
    output_dir="../../out/basket_analysis"
)

APRIORI_CONFIG = MLxtendConfig(algorithm='apriori', min_support=0.001, max_len=4)

TOP_N = 10


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_experiment():
    print("=" * 70)
    print("MARKET BASKET ANALYSIS")
    print("=" * 70)

    print("\n[1] Loading data...")
    store = load_data(EXPERIMENT.data)
    print(f"  Transactions: {len(store)}")
    print(f"  Items: {len(store.items)}")

    print("\n[2] Basket sizes")
    sizes = store.basket_sizes()
    print(sizes.describe().to_string())

    print(f"\n[3] Top {TOP_N} items by support")
    print(store.item_frequencies(top_n=TOP_N).to_string())

    print("\n[4] ECLAT itemsets and rules...")
    itemsets, rules, stats = run_rule_mining(store, EXPERIMENT.mining)
    print(f"  Itemsets: {len(itemsets)}")
    print(f"  Rules (significant, maximal): {len(rules)}")
    if 'rules' in stats:
        print(f"  Non-maximal rules among significant: {stats['rules'].get('num_non_maximal', 0)}")

    print(f"\n  Top {TOP_N} rules by lift:")
    print(rules_to_frame(top_rules(rules, by='lift', n=TOP_N)).to_string(index=False))

    print("\n[5] Apriori rules (mlxtend)...")
    apriori_config = RuleMiningConfig(
        miner_type='mlxtend',
        miner_config=APRIORI_CONFIG,
        rules=EXPERIMENT.mining.rules,
        mode='rules'
    )
    _, apriori_rules, apriori_stats = run_rule_mining(store, apriori_config)
    print(f"  Rules: {len(apriori_rules)}")

    print(f"\n{'=' * 70}")
    print("SAVING RESULTS")
    print("=" * 70)

    output_file = generate_output_filename(EXPERIMENT)

    parameters = {
        **flatten_stats({'eclat': EXPERIMENT.mining.to_dict()}),
        'apriori': APRIORI_CONFIG.to_dict(),
        'data': EXPERIMENT.data.to_dict(),
        'timestamp': datetime.now().isoformat()
    }
    summary = {
        **flatten_stats(stats),
        **flatten_stats({'apriori': apriori_stats.get('rules', {})})
    }

    excel_path = save_mining_results(
        itemsets=itemsets,
        rules=rules,
        stats=summary,
        output_path=output_file,
        parameters=parameters,
        metadata={'dataset': EXPERIMENT.data.name, 'transactions': len(store)}
    )
    text_path = save_rules_text(
        top_rules(rules, by='lift', n=None),
        output_file.with_name(f"{output_file.name}_rules"),
        title="SIGNIFICANT MAXIMAL RULES",
        metadata={'dataset': EXPERIMENT.data.name}
    )
    profile_path = save_basket_profile(
        store,
        output_file.with_name(f"{output_file.name}_profile"),
        top_n=None
    )

    print(f"\n{'=' * 70}")
    print("EXPERIMENT COMPLETE")
    print("=" * 70)
    print(f"  Largest itemsets:\n{itemsets_to_frame(itemsets).tail(TOP_N).to_string(index=False)}")
    print(f"\nOutput: {excel_path}")
    print(f"        {text_path}")
    print(f"        {profile_path}")
    print("=" * 70)


if __name__ == '__main__':
    run_experiment()
