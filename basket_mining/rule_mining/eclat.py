"""
ECLAT frequent itemset mining.

Depth-first search over the vertical representation of the store: every item
carries its tid-list, and the tid-list of an extended itemset is the
intersection of its prefix's tid-list with the new item's tid-list.
Infrequent itemsets are never extended, since no superset of an infrequent
itemset can be frequent.
"""
import logging
from typing import FrozenSet, List, Optional, Tuple

from basket_mining.rule_mining.base import FrequentItemsetMiner
from basket_mining.transactions import TransactionStore, Itemset

logger = logging.getLogger(__name__)

# (item, tid-list) pairs, in the fixed lexicographic item order
Candidates = List[Tuple[str, FrozenSet[int]]]


class EclatMiner(FrequentItemsetMiner):
    """
    Vertical (tid-list intersection) frequent itemset miner.

    Itemsets are only extended with items that sort after every item they
    already contain, so each itemset is generated exactly once.
    """

    algorithm_name = 'eclat'

    def __init__(
        self,
        min_support: float = 0.01,
        min_len: int = 1,
        max_len: Optional[int] = None,
        **kwargs
    ):
        super().__init__(min_support, min_len, max_len, **kwargs)

    def _is_frequent(self, count: int, n_transactions: int) -> bool:
        # Zero-count itemsets are never reported, even with min_support == 0
        return count > 0 and count / n_transactions >= self.min_support

    def mine(self, store: TransactionStore) -> List[Itemset]:
        n_transactions = len(store)
        max_len = len(store.items) if self.max_len is None else min(self.max_len, len(store.items))

        if n_transactions == 0 or self.min_len > max_len:
            logger.debug("Nothing to mine (transactions=%d, min_len=%d, max_len=%d)",
                         n_transactions, self.min_len, max_len)
            return []

        candidates = [
            (item, store.tid_list(item)) for item in store.items
            if self._is_frequent(len(store.tid_list(item)), n_transactions)
        ]

        results: List[Itemset] = []
        self._extend((), candidates, max_len, n_transactions, results)

        results.sort(key=lambda i: (len(i), i.sorted_items))
        logger.info("ECLAT found %d itemsets (min_support=%s, len=%d..%d)",
                    len(results), self.min_support, self.min_len, max_len)
        return results

    def _extend(
        self,
        prefix: Tuple[str, ...],
        candidates: Candidates,
        max_len: int,
        n_transactions: int,
        results: List[Itemset]
    ):
        for index, (item, tids) in enumerate(candidates):
            itemset = prefix + (item,)

            if len(itemset) >= self.min_len:
                results.append(Itemset(
                    items=frozenset(itemset),
                    count=len(tids),
                    support=len(tids) / n_transactions
                ))

            if len(itemset) >= max_len:
                continue

            extensions = []
            for other_item, other_tids in candidates[index + 1:]:
                common = tids & other_tids
                if self._is_frequent(len(common), n_transactions):
                    extensions.append((other_item, common))

            if extensions:
                self._extend(itemset, extensions, max_len, n_transactions, results)

    def __repr__(self):
        return (f"EclatMiner(min_support={self.min_support}, min_len={self.min_len}, "
                f"max_len={self.max_len})")
