"""
MLxtend-based mining.

Delegates itemset enumeration and rule derivation to mlxtend
(Apriori, FP-Growth, FPMax) and converts the resulting DataFrames into the
package's Itemset and Rule records. Useful as a cross-check for EclatMiner
and RuleGenerator.
"""
import logging
import time
from typing import Dict, List, Tuple, Any, Optional

import pandas as pd
from mlxtend.frequent_patterns import fpgrowth, apriori, fpmax, association_rules

from basket_mining.exceptions import InvalidParameterError
from basket_mining.rule_mining.base import HybridMiner, rule_stats
from basket_mining.transactions import TransactionStore, Itemset, Rule

logger = logging.getLogger(__name__)


class MLxtendMiner(HybridMiner):
    """
    MLxtend miner with multiple algorithm support.

    Supports algorithms:
    - 'apriori': Apriori (classic level-wise algorithm, default)
    - 'fpgrowth': FP-Growth
    - 'fpmax': FPMax (maximal itemsets only; cannot be used for rules)
    """

    ALGORITHMS = {
        'apriori': apriori,
        'fpgrowth': fpgrowth,
        'fpmax': fpmax
    }

    def __init__(
        self,
        algorithm: str = 'apriori',
        min_support: float = 0.01,
        min_confidence: float = 0.5,
        min_len: int = 1,
        max_len: Optional[int] = None,
        **kwargs
    ):
        """
        Initialize MLxtend miner.

        Args:
            algorithm: Mining algorithm ('apriori', 'fpgrowth', 'fpmax')
            min_support: Minimum support threshold, in (0, 1]
            min_confidence: Minimum confidence threshold
            min_len: Minimum number of items per itemset
            max_len: Maximum number of items per itemset
        """
        super().__init__(min_support, min_confidence, min_len, max_len, **kwargs)
        self.algorithm = algorithm.lower()

        if self.algorithm not in self.ALGORITHMS:
            raise InvalidParameterError(
                f"Algorithm must be one of {list(self.ALGORITHMS)}, got '{self.algorithm}'"
            )
        # mlxtend rejects non-positive support thresholds
        if self.min_support <= 0:
            raise InvalidParameterError("MLxtendMiner requires min_support > 0")

    @property
    def algorithm_name(self) -> str:
        return f'MLxtend_{self.algorithm}'

    def _frequent_itemsets(self, store: TransactionStore) -> pd.DataFrame:
        mine = self.ALGORITHMS[self.algorithm]
        return mine(
            store.to_onehot(),
            min_support=self.min_support,
            use_colnames=True,
            max_len=self.max_len
        )

    def mine(self, store: TransactionStore) -> List[Itemset]:
        if len(store) == 0:
            return []

        frequent_itemsets_df = self._frequent_itemsets(store)
        n_transactions = len(store)

        itemsets = []
        for _, row in frequent_itemsets_df.iterrows():
            items = frozenset(row['itemsets'])
            if len(items) < self.min_len:
                continue
            support = float(row['support'])
            itemsets.append(Itemset(
                items=items,
                count=int(round(support * n_transactions)),
                support=support
            ))

        itemsets.sort(key=lambda i: (len(i), i.sorted_items))
        return itemsets

    def mine_rules(self, store: TransactionStore) -> Tuple[List[Rule], Dict[str, Any]]:
        """
        Mine association rules with mlxtend's association_rules.

        Returns:
            Tuple of (rules, stats)
        """
        if self.algorithm == 'fpmax':
            raise InvalidParameterError(
                "fpmax only reports maximal itemsets; rule generation needs every subset's support"
            )

        start_time = time.time()

        if len(store) == 0:
            return [], rule_stats([], time.time() - start_time, self.algorithm_name)

        frequent_itemsets_df = self._frequent_itemsets(store)
        if len(frequent_itemsets_df) == 0:
            return [], rule_stats([], time.time() - start_time, self.algorithm_name)

        rules_df = association_rules(
            frequent_itemsets_df,
            num_itemsets=len(store),
            metric='confidence',
            min_threshold=self.min_confidence
        )

        n_transactions = len(store)
        min_len = max(self.min_len, 2)
        rules = []
        for _, row in rules_df.iterrows():
            lhs = frozenset(row['antecedents'])
            rhs = frozenset(row['consequents'])
            if len(lhs) + len(rhs) < min_len:
                continue
            support = float(row['support'])
            rules.append(Rule(
                lhs=lhs,
                rhs=rhs,
                support=support,
                confidence=float(row['confidence']),
                lift=float(row['lift']),
                coverage=float(row['antecedent support']),
                count=int(round(support * n_transactions))
            ))

        rules.sort(key=Rule.sort_key)
        logger.info("%s produced %d rules", self.algorithm_name, len(rules))
        return rules, rule_stats(rules, time.time() - start_time, self.algorithm_name)

    def __repr__(self):
        return (f"MLxtendMiner(algorithm='{self.algorithm}', min_support={self.min_support}, "
                f"min_confidence={self.min_confidence}, max_len={self.max_len})")
