"""
Removal of non-maximal (redundant) rules.

A rule is redundant when a more general rule in the same collection implies
it: the general rule's lhs is a proper subset of its lhs, the general rule's
rhs contains its rhs, and the general rule has at least the same support and
confidence.
"""
import logging
import math
from typing import Dict, List

from basket_mining.exceptions import EmptyRuleSetError
from basket_mining.transactions import Rule

logger = logging.getLogger(__name__)


def _at_least(a: float, b: float) -> bool:
    return a >= b or math.isclose(a, b, rel_tol=1e-12, abs_tol=1e-15)


def implies(general: Rule, specific: Rule) -> bool:
    """True when general is a more general rule that makes specific redundant."""
    return (
        general.lhs < specific.lhs
        and general.rhs >= specific.rhs
        and _at_least(general.support, specific.support)
        and _at_least(general.confidence, specific.confidence)
    )


def is_maximal(rule: Rule, rules: List[Rule]) -> bool:
    return not any(implies(other, rule) for other in rules)


def _index_by_rhs_item(rules: List[Rule]) -> Dict[str, List[Rule]]:
    index: Dict[str, List[Rule]] = {}
    for rule in rules:
        for item in rule.rhs:
            index.setdefault(item, []).append(rule)
    return index


def _non_maximal_flags(rules: List[Rule]) -> List[bool]:
    # A rule implying another must share every rhs item with it, so looking
    # up one rhs item is enough to find all candidates
    by_rhs_item = _index_by_rhs_item(rules)
    flags = []
    for rule in rules:
        candidates = by_rhs_item.get(min(rule.rhs), [])
        flags.append(any(implies(other, rule) for other in candidates))
    return flags


def filter_maximal(rules: List[Rule]) -> List[Rule]:
    """
    Remove every non-maximal rule, preserving the order of the rest.

    Raises:
        EmptyRuleSetError: rules is empty
    """
    if not rules:
        raise EmptyRuleSetError("Cannot filter an empty rule set for maximality")

    flags = _non_maximal_flags(rules)
    kept = [rule for rule, redundant in zip(rules, flags) if not redundant]
    logger.info("Maximality filter: removed %d of %d rules", len(rules) - len(kept), len(rules))
    return kept


def count_non_maximal(rules: List[Rule]) -> int:
    """Number of rules implied by a more general rule of the collection."""
    return sum(_non_maximal_flags(rules))
