"""
Association rule generation from frequent itemsets.
"""
import logging
import time
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, List, Tuple, Any

from basket_mining.exceptions import InvalidParameterError, check_ratio
from basket_mining.rule_mining.base import rule_stats
from basket_mining.transactions import Itemset, Rule

logger = logging.getLogger(__name__)


class RuleGenerator:
    """
    Derives lhs -> rhs rules from a collection of frequent itemsets.

    Every non-empty proper subset of a frequent itemset is tried as lhs. The
    supports of lhs and rhs are looked up in the same collection; a split
    whose lhs or rhs was not mined is skipped rather than scored.
    """

    def __init__(self, min_confidence: float = 0.5, min_len: int = 2):
        """
        Args:
            min_confidence: Minimum confidence, in [0, 1]
            min_len: Minimum number of items in lhs | rhs (at least 2 is always required)
        """
        check_ratio('min_confidence', min_confidence)
        if min_len is None or min_len < 1:
            raise InvalidParameterError(f"min_len must be >= 1, got {min_len!r}")
        self.min_confidence = min_confidence
        self.min_len = min_len

    def generate(self, itemsets: Iterable[Itemset]) -> List[Rule]:
        itemsets = list(itemsets)
        supports: Dict[FrozenSet[str], float] = {i.items: i.support for i in itemsets}
        min_len = max(self.min_len, 2)

        rules = []
        skipped = 0
        for itemset in itemsets:
            if len(itemset) < min_len:
                continue
            items = itemset.sorted_items
            for lhs_size in range(1, len(items)):
                for lhs_items in combinations(items, lhs_size):
                    lhs = frozenset(lhs_items)
                    rhs = itemset.items - lhs
                    if not supports.get(lhs) or not supports.get(rhs):
                        skipped += 1
                        continue
                    rule = _make_rule(itemset, lhs, rhs, supports[lhs], supports[rhs])
                    if rule.confidence >= self.min_confidence:
                        rules.append(rule)

        if skipped:
            logger.debug("Skipped %d splits with unmined or zero-support lhs or rhs", skipped)

        rules.sort(key=Rule.sort_key)
        logger.info("Generated %d rules (min_confidence=%s)", len(rules), self.min_confidence)
        return rules

    def generate_rules(self, itemsets: Iterable[Itemset]) -> Tuple[List[Rule], Dict[str, Any]]:
        start_time = time.time()
        rules = self.generate(itemsets)
        return rules, rule_stats(rules, time.time() - start_time, 'rule_generator')

    def __repr__(self):
        return f"RuleGenerator(min_confidence={self.min_confidence}, min_len={self.min_len})"


def _make_rule(
    itemset: Itemset,
    lhs: FrozenSet[str],
    rhs: FrozenSet[str],
    lhs_support: float,
    rhs_support: float
) -> Rule:
    confidence = itemset.support / lhs_support
    return Rule(
        lhs=lhs,
        rhs=rhs,
        support=itemset.support,
        confidence=confidence,
        lift=confidence / rhs_support,
        coverage=lhs_support,
        count=itemset.count
    )
