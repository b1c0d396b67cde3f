"""
Market-basket analysis: frequent itemsets, association rules and rule filtering
over in-memory transaction data.
"""
from .exceptions import (
    BasketMiningError,
    InvalidInputError,
    EmptyRuleSetError,
    InvalidParameterError
)
from .transactions import Transaction, TransactionStore, Itemset, Rule
from .rule_mining import EclatMiner, RuleGenerator, MLxtendMiner
from .postprocessing import (
    is_significant,
    filter_significant,
    is_maximal,
    filter_maximal
)

__version__ = "0.1.0"

__all__ = [
    'BasketMiningError',
    'InvalidInputError',
    'EmptyRuleSetError',
    'InvalidParameterError',
    'Transaction',
    'TransactionStore',
    'Itemset',
    'Rule',
    'EclatMiner',
    'RuleGenerator',
    'MLxtendMiner',
    'is_significant',
    'filter_significant',
    'is_maximal',
    'filter_maximal'
]
