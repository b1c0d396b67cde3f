"""
Rule Mining Module

Supports different mining approaches:
- Frequent itemset mining (ECLAT, MLxtend Apriori / FP-Growth / FPMax)
- Association rule generation (RuleGenerator, MLxtend association_rules)
"""
from .base import FrequentItemsetMiner, AssociationRuleMiner, HybridMiner
from .eclat import EclatMiner
from .rules import RuleGenerator
from .mlxtend_miner import MLxtendMiner

__all__ = [
    'FrequentItemsetMiner',
    'AssociationRuleMiner',
    'HybridMiner',
    'EclatMiner',
    'RuleGenerator',
    'MLxtendMiner'
]
