from typing import List, Iterable, Optional, Tuple, Dict, Any

from basket_mining.exceptions import InvalidParameterError
from basket_mining.transactions import Rule, Itemset

RULE_METRICS = ['support', 'confidence', 'lift', 'coverage', 'count']
ITEMSET_METRICS = ['support', 'count']


def _check_metric(criterion: str, valid: List[str]):
    if criterion not in valid:
        raise InvalidParameterError(f"Metric must be one of {valid}, got '{criterion}'")


def filter_rules(rules: List[Rule], criterion: str, threshold: float) -> List[Rule]:
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: List of rules
        criterion: The rule metric to filter on ('support', 'confidence', 'lift', 'coverage', 'count')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        List of rules meeting the criterion
    """
    _check_metric(criterion, RULE_METRICS)
    return [rule for rule in rules if getattr(rule, criterion) >= threshold]


def filter_rules_by_items(
    rules: List[Rule],
    lhs_contains: Optional[Iterable[str]] = None,
    rhs_contains: Optional[Iterable[str]] = None,
    lhs_excludes: Optional[Iterable[str]] = None,
    rhs_excludes: Optional[Iterable[str]] = None,
    match_any: bool = False
) -> List[Rule]:
    """
    Filter rules by the items on either side.

    Args:
        rules: List of rules
        lhs_contains: Items that must appear in the antecedent
        rhs_contains: Items that must appear in the consequent
        lhs_excludes: Items that must NOT appear in the antecedent
        rhs_excludes: Items that must NOT appear in the consequent
        match_any: If True, one listed item is enough for the *_contains
                   conditions. If False, all must be present.

    Returns:
        List of filtered rules
    """
    def contains(side, items):
        if not items:
            return True
        items = set(items)
        return bool(side & items) if match_any else items <= side

    def excludes(side, items):
        return not items or not (side & set(items))

    return [
        rule for rule in rules
        if contains(rule.lhs, lhs_contains)
        and contains(rule.rhs, rhs_contains)
        and excludes(rule.lhs, lhs_excludes)
        and excludes(rule.rhs, rhs_excludes)
    ]


def top_rules(rules: List[Rule], by: str = 'lift', n: Optional[int] = 10) -> List[Rule]:
    """The n best rules by a metric, ties kept in input order."""
    _check_metric(by, RULE_METRICS)
    ranked = sorted(rules, key=lambda rule: getattr(rule, by), reverse=True)
    return ranked if n is None else ranked[:n]


def filter_itemsets(
    itemsets: List[Itemset],
    criterion: str = 'support',
    threshold: float = 0.0
) -> Tuple[List[Itemset], Dict[str, Any]]:
    """
    Filters frequent itemsets based on a criterion >= threshold.
    Returns both filtered itemsets and a stats dictionary.

    Args:
        itemsets: List of itemsets
        criterion: The metric to filter on ('support' or 'count')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        Tuple of (filtered_itemsets, stats)
    """
    _check_metric(criterion, ITEMSET_METRICS)
    filtered_itemset_list = [i for i in itemsets if getattr(i, criterion) >= threshold]

    count = len(filtered_itemset_list)
    if count == 0:
        return filtered_itemset_list, {"num_itemsets": 0, "average_support": 0.0}

    avg_support = sum(i.support for i in filtered_itemset_list) / count
    stats = {
        "num_itemsets": count,
        "average_support": round(avg_support, 3),
    }
    return filtered_itemset_list, stats
