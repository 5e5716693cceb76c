"""
Invariant Module - 状态不变量

Classes:
    StateInvariants: 状态不变量检查器
    BaseInvariantChecker: 不变量检查器基类

Types:
    InvariantType: 不变量类型枚举
    Severity: 违反严重程度
    InvariantViolation: 不变量违反记录
    InvariantCheckResult: 不变量检查结果
    InvariantError: 不变量错误异常
"""

from .types import (
    InvariantType,
    Severity,
    InvariantViolation,
    InvariantCheckResult,
    InvariantError
)
from .base_checker import BaseInvariantChecker
from .state_invariants import (
    CurrencyBalanceChecker,
    OwnedUpgradesChecker,
    MultiplierConsistencyChecker,
    MonotonicTotalsChecker,
    StateInvariants,
)

__all__ = [
    'InvariantType',
    'Severity',
    'InvariantViolation',
    'InvariantCheckResult',
    'InvariantError',
    'BaseInvariantChecker',
    'CurrencyBalanceChecker',
    'OwnedUpgradesChecker',
    'MultiplierConsistencyChecker',
    'MonotonicTotalsChecker',
    'StateInvariants',
]
