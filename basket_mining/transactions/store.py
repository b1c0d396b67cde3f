"""
In-memory transaction store.

Raw (transaction_id, item) rows are grouped into baskets once at load time.
The store keeps a vertical index (item -> tid-list) next to the baskets so
support counts are set intersections.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Optional, Tuple

import pandas as pd
from mlxtend.preprocessing import TransactionEncoder

from basket_mining.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    tid: Hashable
    items: FrozenSet[str]

    def __len__(self) -> int:
        return len(self.items)


def _clean_item(item: Any, tid: Hashable) -> str:
    if isinstance(item, str):
        if not item.strip():
            raise InvalidInputError(f"Empty item label in transaction {tid!r}")
        return item
    if item is None or not pd.api.types.is_scalar(item) or pd.isna(item):
        raise InvalidInputError(f"Invalid item label {item!r} in transaction {tid!r}")
    return str(item)


def _label(item: Any) -> Any:
    """Lookup key of an item: non-string scalars are matched by their text."""
    if isinstance(item, str) or not pd.api.types.is_scalar(item):
        return item
    return str(item)


def _clean_tid(tid: Any) -> Hashable:
    if tid is None or (pd.api.types.is_scalar(tid) and pd.isna(tid)):
        raise InvalidInputError("Record without a transaction id")
    try:
        hash(tid)
    except TypeError:
        raise InvalidInputError(f"Transaction id must be hashable, got {tid!r}")
    return tid


class TransactionStore:
    """
    Ordered, immutable collection of transactions.

    Transactions keep the order in which their ids first appear in the input.
    Item labels are stored as strings.
    """

    def __init__(self, transactions: Iterable[Transaction]):
        self._transactions: Tuple[Transaction, ...] = tuple(transactions)

        tid_lists: Dict[str, set] = {}
        for index, transaction in enumerate(self._transactions):
            for item in transaction.items:
                tid_lists.setdefault(item, set()).add(index)

        self._tid_lists: Dict[str, FrozenSet[int]] = {
            item: frozenset(tids) for item, tids in tid_lists.items()
        }
        self._items: Tuple[str, ...] = tuple(sorted(self._tid_lists))

    @classmethod
    def load(cls, records: Iterable[Tuple[Hashable, Any]]) -> 'TransactionStore':
        """
        Build a store from (transaction_id, item) pairs.

        Duplicate items inside a transaction are collapsed. Non-string labels
        are stored as their text, so 10 and '10' may not both appear.

        Raises:
            InvalidInputError: a record is not a pair, has no transaction id,
                references an empty item label, or mixes a string label with
                a non-string label of the same text
        """
        baskets: Dict[Hashable, set] = {}
        label_is_str: Dict[str, bool] = {}
        n_records = 0
        for record in records:
            try:
                tid, item = record
            except (TypeError, ValueError):
                raise InvalidInputError(f"Expected a (transaction_id, item) pair, got {record!r}")
            tid = _clean_tid(tid)
            label = _clean_item(item, tid)
            if label_is_str.setdefault(label, isinstance(item, str)) != isinstance(item, str):
                raise InvalidInputError(f"Ambiguous item label {item!r}: both text and non-text forms present")
            baskets.setdefault(tid, set()).add(label)
            n_records += 1

        store = cls(Transaction(tid, frozenset(items)) for tid, items in baskets.items())
        logger.info(
            "Loaded %d records into %d transactions over %d items",
            n_records, len(store), len(store.items)
        )
        return store

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        transaction_col: str,
        item_col: str
    ) -> 'TransactionStore':
        """Build a store from a long-format DataFrame with one row per purchased item."""
        missing = [c for c in (transaction_col, item_col) if c not in df.columns]
        if missing:
            raise InvalidInputError(f"Missing columns: {missing}")
        return cls.load(zip(df[transaction_col].tolist(), df[item_col].tolist()))

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    @property
    def items(self) -> Tuple[str, ...]:
        """Item vocabulary in lexicographic order."""
        return self._items

    def size(self) -> int:
        return len(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self):
        return iter(self._transactions)

    def tid_list(self, item: str) -> FrozenSet[int]:
        """Indices of the transactions containing item."""
        return self._tid_lists.get(_label(item), frozenset())

    def count(self, itemset: Iterable[str]) -> int:
        """Number of transactions that contain every item of itemset."""
        items = list(itemset)
        if not items:
            return len(self._transactions)
        tids = self.tid_list(items[0])
        for item in items[1:]:
            if not tids:
                break
            tids = tids & self.tid_list(item)
        return len(tids)

    def support(self, itemset: Iterable[str]) -> float:
        if not self._transactions:
            return 0.0
        return self.count(itemset) / len(self._transactions)

    def item_frequency(self, item: str) -> float:
        """Support ratio of the single item; 0.0 outside the vocabulary."""
        return self.support([item])

    def basket_sizes(self) -> pd.Series:
        """Number of distinct items per transaction, indexed by transaction id."""
        return pd.Series(
            [len(t) for t in self._transactions],
            index=[t.tid for t in self._transactions],
            name='basket_size',
            dtype='int64'
        )

    def item_frequencies(self, top_n: Optional[int] = None, relative: bool = True) -> pd.Series:
        """
        Item frequencies, most frequent first (ties broken by label).

        Args:
            top_n: Keep only the n most frequent items
            relative: Support ratios if True, absolute counts otherwise
        """
        counts = pd.Series(
            {item: len(tids) for item, tids in self._tid_lists.items()},
            dtype='int64'
        ).sort_index()
        counts = counts.sort_values(ascending=False, kind='mergesort')
        if relative:
            counts = counts / len(self._transactions) if self._transactions else counts.astype(float)
        counts.name = 'support' if relative else 'count'
        if top_n is not None:
            counts = counts.head(top_n)
        return counts

    def to_onehot(self) -> pd.DataFrame:
        """Boolean transaction x item matrix, columns in vocabulary order."""
        baskets = [sorted(t.items) for t in self._transactions]
        if not baskets:
            return pd.DataFrame(columns=list(self._items), dtype=bool)
        te = TransactionEncoder()
        te_array = te.fit(baskets).transform(baskets)
        return pd.DataFrame(te_array, columns=te.columns_)

    def __repr__(self):
        return f"TransactionStore(transactions={len(self)}, items={len(self._items)})"
