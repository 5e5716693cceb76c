"""
状态不变量类型

检查器产出的违反记录与检查结果。
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List
import time

__all__ = [
    'InvariantType',
    'Severity',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError',
]


class InvariantType(Enum):
    """不变量类型"""
    CURRENCY_BALANCE = auto()         # 余额非负
    OWNED_UPGRADES = auto()           # 已拥有升级无重复且均在目录中
    MULTIPLIER_CONSISTENCY = auto()   # 倍率等于已拥有升级倍率之积
    MONOTONIC_TOTALS = auto()         # 累计统计单调不减


class Severity(Enum):
    """违反严重程度"""
    CRITICAL = 'critical'
    WARNING = 'warning'


@dataclass(frozen=True)
class InvariantViolation:
    """一条不变量违反"""
    invariant_type: InvariantType
    description: str
    severity: Severity = Severity.CRITICAL
    context: Dict[str, Any] = field(default_factory=dict)
    detected_at: float = field(default_factory=time.time)

    def __post_init__(self):
        if not self.description:
            raise ValueError("description不能为空")


@dataclass(frozen=True)
class InvariantCheckResult:
    """单个检查器的结果，没有违反即为通过"""
    invariant_type: InvariantType
    violations: List[InvariantViolation] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def critical(self) -> List[InvariantViolation]:
        return [v for v in self.violations if v.severity is Severity.CRITICAL]


class InvariantError(Exception):
    """存在严重违反时由check_all(raise_on_violation=True)抛出"""

    def __init__(self, message: str, violations: List[InvariantViolation]):
        super().__init__(message)
        self.violations = violations

    def get_critical_violations(self) -> List[InvariantViolation]:
        return [v for v in self.violations if v.severity is Severity.CRITICAL]
