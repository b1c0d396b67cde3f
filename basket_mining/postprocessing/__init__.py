from .rule import filter_rules, filter_rules_by_items, top_rules, filter_itemsets
from .significance import (
    contingency_table,
    fisher_p_value,
    is_significant,
    adjust_p_values,
    filter_significant
)
from .maximality import implies, is_maximal, filter_maximal, count_non_maximal

__all__ = [
    'filter_rules',
    'filter_rules_by_items',
    'top_rules',
    'filter_itemsets',
    'contingency_table',
    'fisher_p_value',
    'is_significant',
    'adjust_p_values',
    'filter_significant',
    'implies',
    'is_maximal',
    'filter_maximal',
    'count_non_maximal'
]
