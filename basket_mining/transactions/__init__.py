from .store import Transaction, TransactionStore
from .records import Itemset, Rule, itemsets_to_frame, rules_to_frame

__all__ = [
    'Transaction',
    'TransactionStore',
    'Itemset',
    'Rule',
    'itemsets_to_frame',
    'rules_to_frame'
]
