from .config import (
    DataConfig,
    EclatConfig,
    MLxtendConfig,
    RuleConfig,
    FilterConfig,
    SignificanceConfig,
    RuleMiningConfig,
    ExperimentConfig
)
from .base import (
    load_data,
    run_rule_mining,
    create_miner,
    apply_filters,
    flatten_stats,
    generate_output_filename
)

__all__ = [
    'DataConfig',
    'EclatConfig',
    'MLxtendConfig',
    'RuleConfig',
    'FilterConfig',
    'SignificanceConfig',
    'RuleMiningConfig',
    'ExperimentConfig',
    'load_data',
    'run_rule_mining',
    'create_miner',
    'apply_filters',
    'flatten_stats',
    'generate_output_filename'
]
