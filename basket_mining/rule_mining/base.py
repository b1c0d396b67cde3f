"""
Base interfaces for itemset and rule mining algorithms.
"""
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, Any, Optional

from basket_mining.exceptions import InvalidParameterError, check_ratio
from basket_mining.transactions import TransactionStore, Itemset, Rule


class FrequentItemsetMiner(ABC):
    """
    Base class for frequent itemset mining algorithms.

    These algorithms discover frequently co-purchased item combinations
    without forming rules (no antecedent -> consequent structure).
    """

    algorithm_name = 'itemsets'

    def __init__(
        self,
        min_support: float = 0.01,
        min_len: int = 1,
        max_len: Optional[int] = None,
        **kwargs
    ):
        """
        Args:
            min_support: Minimum support ratio, in [0, 1]
            min_len: Minimum number of items per itemset (>= 1)
            max_len: Maximum number of items per itemset (None: no limit)
        """
        check_ratio('min_support', min_support)
        if min_len is None or min_len < 1:
            raise InvalidParameterError(f"min_len must be >= 1, got {min_len!r}")
        self.min_support = min_support
        self.min_len = min_len
        self.max_len = max_len
        self.config = kwargs

    @abstractmethod
    def mine(self, store: TransactionStore) -> List[Itemset]:
        """
        Mine frequent itemsets.

        Returns:
            Itemsets with size in [min_len, max_len] and support >= min_support,
            ordered by size, then by sorted items
        """
        pass

    def mine_itemsets(self, store: TransactionStore) -> Tuple[List[Itemset], Dict[str, Any]]:
        """
        Mine frequent itemsets and collect run statistics.

        Returns:
            Tuple of (itemsets, stats)
        """
        start_time = time.time()
        itemsets = self.mine(store)
        execution_time = time.time() - start_time

        stats = {
            'num_itemsets': len(itemsets),
            'execution_time': execution_time,
            'average_support': sum(i.support for i in itemsets) / len(itemsets) if itemsets else 0.0,
            'max_length': max((len(i) for i in itemsets), default=0),
            'algorithm': self.algorithm_name,
            'mode': 'itemsets'
        }
        return itemsets, stats


class AssociationRuleMiner(ABC):
    """
    Base class for algorithms that produce rules directly from a store,
    in the form: antecedent -> consequent with support, confidence, lift
    and coverage.
    """

    algorithm_name = 'rules'

    def __init__(self, min_support: float = 0.01, min_confidence: float = 0.5, **kwargs):
        check_ratio('min_support', min_support)
        check_ratio('min_confidence', min_confidence)
        self.min_support = min_support
        self.min_confidence = min_confidence
        self.config = kwargs

    @abstractmethod
    def mine_rules(self, store: TransactionStore) -> Tuple[List[Rule], Dict[str, Any]]:
        """
        Mine association rules.

        Returns:
            Tuple of (rules, stats)
        """
        pass


class HybridMiner(FrequentItemsetMiner, AssociationRuleMiner):
    """
    Base class for algorithms that produce both frequent itemsets and rules.

    max_len applies to the itemset the rule is built from (lhs | rhs).
    """

    def __init__(
        self,
        min_support: float = 0.01,
        min_confidence: float = 0.5,
        min_len: int = 1,
        max_len: Optional[int] = None,
        **kwargs
    ):
        FrequentItemsetMiner.__init__(self, min_support, min_len, max_len, **kwargs)
        check_ratio('min_confidence', min_confidence)
        self.min_confidence = min_confidence


def rule_stats(rules: List[Rule], execution_time: float, algorithm: str) -> Dict[str, Any]:
    n = len(rules)
    return {
        'num_rules': n,
        'execution_time': execution_time,
        'average_support': sum(r.support for r in rules) / n if n else 0.0,
        'average_confidence': sum(r.confidence for r in rules) / n if n else 0.0,
        'average_lift': sum(r.lift for r in rules) / n if n else 0.0,
        'algorithm': algorithm,
        'mode': 'rules'
    }
