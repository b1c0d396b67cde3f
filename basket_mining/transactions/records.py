"""
Result records produced by the miners.

Itemsets and rules are frozen: filters build new lists instead of editing
existing entries.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Any, Tuple
import pandas as pd


@dataclass(frozen=True)
class Itemset:
    items: FrozenSet[str]
    count: int
    support: float

    def __len__(self) -> int:
        return len(self.items)

    @property
    def sorted_items(self) -> Tuple[str, ...]:
        return tuple(sorted(self.items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': list(self.sorted_items),
            'length': len(self.items),
            'count': self.count,
            'support': self.support
        }

    def __str__(self):
        return "{" + ", ".join(self.sorted_items) + "}"


@dataclass(frozen=True)
class Rule:
    """
    Association rule lhs -> rhs.

    support:    support of lhs | rhs
    confidence: support(lhs | rhs) / support(lhs)
    lift:       confidence / support(rhs)
    coverage:   support(lhs)
    count:      number of transactions containing lhs | rhs
    """
    lhs: FrozenSet[str]
    rhs: FrozenSet[str]
    support: float
    confidence: float
    lift: float
    coverage: float
    count: int

    @property
    def items(self) -> FrozenSet[str]:
        return self.lhs | self.rhs

    def sort_key(self) -> Tuple:
        return (len(self.items), tuple(sorted(self.lhs)), tuple(sorted(self.rhs)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'antecedents': sorted(self.lhs),
            'consequents': sorted(self.rhs),
            'support': self.support,
            'confidence': self.confidence,
            'lift': self.lift,
            'coverage': self.coverage,
            'count': self.count
        }

    def __str__(self):
        lhs = ", ".join(sorted(self.lhs))
        rhs = ", ".join(sorted(self.rhs))
        return f"{{{lhs}}} => {{{rhs}}}"


def itemsets_to_frame(itemsets: List[Itemset]) -> pd.DataFrame:
    """Tabular view of itemsets, one row per itemset."""
    columns = ['items', 'length', 'count', 'support']
    return pd.DataFrame([i.to_dict() for i in itemsets], columns=columns)


def rules_to_frame(rules: List[Rule]) -> pd.DataFrame:
    """Tabular view of rules, one row per rule."""
    columns = ['antecedents', 'consequents', 'support', 'confidence', 'lift', 'coverage', 'count']
    return pd.DataFrame([r.to_dict() for r in rules], columns=columns)
