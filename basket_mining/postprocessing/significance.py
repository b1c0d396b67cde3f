"""
Statistical significance filtering of association rules.

A rule lhs -> rhs is tested against the null hypothesis that lhs and rhs
occur independently, using a one-sided Fisher exact test on the 2x2
contingency table of transaction counts.
"""
import logging
from typing import List, Sequence

import numpy as np
from scipy import stats
from tqdm.auto import tqdm

from basket_mining.exceptions import EmptyRuleSetError, InvalidParameterError, check_ratio
from basket_mining.transactions import TransactionStore, Rule

logger = logging.getLogger(__name__)

ADJUSTMENTS = ['none', 'bonferroni', 'holm', 'fdr_bh', 'fdr_by']


def contingency_table(rule: Rule, store: TransactionStore) -> np.ndarray:
    """
    Transaction counts for a rule:

        [[lhs and rhs,     lhs and not rhs],
         [not lhs and rhs, neither        ]]
    """
    n = len(store)
    both = store.count(rule.lhs | rule.rhs)
    lhs = store.count(rule.lhs)
    rhs = store.count(rule.rhs)
    return np.array([
        [both, lhs - both],
        [rhs - both, n - lhs - rhs + both]
    ], dtype=np.int64)


def fisher_p_value(rule: Rule, store: TransactionStore) -> float:
    """One-sided p-value for lhs and rhs co-occurring more often than under independence."""
    _, p_value = stats.fisher_exact(contingency_table(rule, store), alternative='greater')
    return float(p_value)


def is_significant(rule: Rule, store: TransactionStore, alpha: float = 0.05) -> bool:
    check_ratio('alpha', alpha)
    return fisher_p_value(rule, store) < alpha


def adjust_p_values(p_values: Sequence[float], method: str = 'none') -> np.ndarray:
    """
    Multiple-testing adjustment of a batch of p-values.

    Args:
        p_values: Raw p-values
        method: 'none', 'bonferroni', 'holm', 'fdr_bh' (Benjamini-Hochberg)
                or 'fdr_by' (Benjamini-Yekutieli)

    Returns:
        Adjusted p-values, in input order
    """
    if method not in ADJUSTMENTS:
        raise InvalidParameterError(f"Adjustment must be one of {ADJUSTMENTS}, got '{method}'")

    p = np.asarray(p_values, dtype=float)
    m = len(p)
    if m == 0 or method == 'none':
        return p

    if method == 'bonferroni':
        return np.minimum(p * m, 1.0)

    if method == 'holm':
        order = np.argsort(p, kind='mergesort')
        scaled = (m - np.arange(m)) * p[order]
        adjusted_sorted = np.minimum(np.maximum.accumulate(scaled), 1.0)
        adjusted = np.empty(m)
        adjusted[order] = adjusted_sorted
        return adjusted

    return stats.false_discovery_control(p, method='bh' if method == 'fdr_bh' else 'by')


def filter_significant(
    rules: List[Rule],
    store: TransactionStore,
    alpha: float = 0.05,
    adjust: str = 'none',
    verbose: bool = False
) -> List[Rule]:
    """
    Keep rules whose (adjusted) Fisher p-value is below alpha.

    Args:
        rules: Rules to test
        store: Store the rules were mined from
        alpha: Significance level
        adjust: Multiple-testing adjustment (see adjust_p_values)
        verbose: Show a progress bar while testing

    Raises:
        EmptyRuleSetError: rules is empty
    """
    if not rules:
        raise EmptyRuleSetError("Cannot test the significance of an empty rule set")
    check_ratio('alpha', alpha)

    rules_iter = tqdm(rules, desc="Testing rule significance", unit="rule") if verbose else rules
    p_values = [fisher_p_value(rule, store) for rule in rules_iter]
    adjusted = adjust_p_values(p_values, adjust)

    kept = [rule for rule, p in zip(rules, adjusted) if p < alpha]
    logger.info("Significance filter (alpha=%s, adjust=%s): kept %d of %d rules",
                alpha, adjust, len(kept), len(rules))
    return kept
