"""
不变量检查器基类
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging
import time

from ..state.types import GameState
from .types import InvariantType, InvariantViolation, InvariantCheckResult, Severity

__all__ = ['BaseInvariantChecker']

logger = logging.getLogger(__name__)


class BaseInvariantChecker(ABC):
    """
    不变量检查器基类

    子类实现_inspect，用_report登记违反；检查过程中抛出的异常本身也记为一条违反。
    """

    def __init__(self, invariant_type: InvariantType):
        self.invariant_type = invariant_type
        self._pending: List[InvariantViolation] = []

    @abstractmethod
    def _inspect(self, state: GameState) -> None:
        pass

    def check(self, state: GameState) -> InvariantCheckResult:
        """
        检查一个状态

        Args:
            state: 游戏状态

        Returns:
            InvariantCheckResult: 检查结果
        """
        self._pending = []
        started = time.perf_counter()
        try:
            self._inspect(state)
        except Exception as e:
            logger.error(f"{self.invariant_type.name}检查异常: {e}", exc_info=True)
            self._report(f"检查过程中发生异常: {e}", context={'exception_type': type(e).__name__})

        return InvariantCheckResult(
            invariant_type=self.invariant_type,
            violations=list(self._pending),
            elapsed_seconds=time.perf_counter() - started,
        )

    def _report(self, description: str, severity: Severity = Severity.CRITICAL,
                context: Optional[Dict[str, Any]] = None) -> None:
        self._pending.append(InvariantViolation(
            invariant_type=self.invariant_type,
            description=description,
            severity=severity,
            context=context or {},
        ))
