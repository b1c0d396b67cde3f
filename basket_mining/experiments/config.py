from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Union
from pathlib import Path


@dataclass
class DataConfig:
    path: str
    name: str
    transaction_col: str = "transaction_id"
    item_col: str = "item"
    sep: str = ","

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'name': self.name,
            'transaction_col': self.transaction_col,
            'item_col': self.item_col,
            'sep': self.sep
        }


@dataclass
class EclatConfig:
    min_support: float = 0.01
    min_len: int = 1
    max_len: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min_support': self.min_support,
            'min_len': self.min_len,
            'max_len': self.max_len
        }


@dataclass
class MLxtendConfig:
    algorithm: str = 'apriori'
    min_support: float = 0.01
    min_len: int = 1
    max_len: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': self.algorithm,
            'min_support': self.min_support,
            'min_len': self.min_len,
            'max_len': self.max_len
        }


@dataclass
class RuleConfig:
    min_confidence: float = 0.5
    min_len: int = 2

    def to_dict(self) -> Dict[str, Any]:
        return {'min_confidence': self.min_confidence, 'min_len': self.min_len}


@dataclass
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}


@dataclass
class SignificanceConfig:
    alpha: float = 0.05
    adjust: str = 'none'  # 'none', 'bonferroni', 'holm', 'fdr_bh', 'fdr_by'

    def to_dict(self) -> Dict[str, Any]:
        return {'alpha': self.alpha, 'adjust': self.adjust}


@dataclass
class RuleMiningConfig:
    miner_type: str  # 'eclat', 'mlxtend'
    miner_config: Union[EclatConfig, MLxtendConfig]
    rules: RuleConfig = field(default_factory=RuleConfig)
    mode: str = 'both'  # 'rules', 'itemsets', 'both'
    filters: List[FilterConfig] = field(default_factory=list)
    significance: Optional[SignificanceConfig] = None
    maximal_only: bool = False

    @classmethod
    def default(cls) -> 'RuleMiningConfig':
        return cls(
            miner_type='eclat',
            miner_config=EclatConfig(min_support=0.001, min_len=1, max_len=None),
            rules=RuleConfig(min_confidence=0.5, min_len=2),
            significance=SignificanceConfig(alpha=0.05),
            maximal_only=True
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'miner_type': self.miner_type,
            'miner_config': self.miner_config.to_dict(),
            'rules': self.rules.to_dict(),
            'mode': self.mode,
            'filters': [f.to_dict() for f in self.filters],
            'significance': self.significance.to_dict() if self.significance else None,
            'maximal_only': self.maximal_only
        }


@dataclass
class ExperimentConfig:
    name: str
    data: DataConfig
    mining: RuleMiningConfig
    output_dir: str = "./out"

    def get_output_path(self) -> Path:
        path = Path(self.output_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path
