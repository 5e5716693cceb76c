"""
状态不变量检查器

检查规范游戏状态的数学约束：
- 余额非负
- 已拥有升级无重复且都在目录中
- 倍率等于已拥有升级倍率之积
- 累计统计为非负整数，且相对上一次通过的检查单调不减
"""

from typing import Dict, Optional

from ..shop.catalog import UpgradeCatalog
from ..state.types import GameState
from .base_checker import BaseInvariantChecker
from .types import InvariantType, InvariantCheckResult, InvariantError

__all__ = [
    'CurrencyBalanceChecker',
    'OwnedUpgradesChecker',
    'MultiplierConsistencyChecker',
    'MonotonicTotalsChecker',
    'StateInvariants',
]

MULTIPLIER_TOLERANCE = 1e-6


class CurrencyBalanceChecker(BaseInvariantChecker):
    """余额非负检查"""

    def __init__(self):
        super().__init__(InvariantType.CURRENCY_BALANCE)

    def _inspect(self, state: GameState) -> None:
        if state.meows < 0:
            self._report(f"喵币余额为负数: {state.meows}", context={'meows': state.meows})


class OwnedUpgradesChecker(BaseInvariantChecker):
    """已拥有升级检查"""

    def __init__(self, catalog: UpgradeCatalog):
        super().__init__(InvariantType.OWNED_UPGRADES)
        self._catalog = catalog

    def _inspect(self, state: GameState) -> None:
        if len(set(state.owned)) != len(state.owned):
            self._report("已拥有升级存在重复", context={'owned': list(state.owned)})
        unknown = [upgrade_id for upgrade_id in state.owned if upgrade_id not in self._catalog]
        if unknown:
            self._report(f"未知的升级ID: {unknown}", context={'unknown': unknown})


class MultiplierConsistencyChecker(BaseInvariantChecker):
    """倍率一致性检查"""

    def __init__(self, catalog: UpgradeCatalog):
        super().__init__(InvariantType.MULTIPLIER_CONSISTENCY)
        self._catalog = catalog

    def _inspect(self, state: GameState) -> None:
        expected = self._catalog.multiplier_for(state.owned)
        if abs(state.multiplier - expected) > MULTIPLIER_TOLERANCE:
            self._report(
                f"倍率不一致: 当前{state.multiplier}, 期望{expected}",
                context={'multiplier': state.multiplier, 'expected': expected}
            )


class MonotonicTotalsChecker(BaseInvariantChecker):
    """累计统计单调性检查，记住上一次通过检查的值"""

    FIELDS = ('total_earned', 'total_spent', 'active_time_seconds')

    def __init__(self):
        super().__init__(InvariantType.MONOTONIC_TOTALS)
        self._baseline: Optional[Dict[str, int]] = None

    def reset_baseline(self) -> None:
        """完整性重置后清除基线"""
        self._baseline = None

    def _inspect(self, state: GameState) -> None:
        current = {name: getattr(state, name) for name in self.FIELDS}
        clean = True
        for name, value in current.items():
            if not isinstance(value, int) or value < 0:
                self._report(f"{name}必须是非负整数: {value!r}", context={name: value})
                clean = False
            elif self._baseline is not None and value < self._baseline[name]:
                self._report(
                    f"{name}减少: {self._baseline[name]} -> {value}",
                    context={'before': self._baseline[name], 'after': value}
                )
                clean = False
        if clean:
            self._baseline = current


class StateInvariants:
    """状态不变量检查器

    整合所有检查器，提供统一的检查接口。
    """

    def __init__(self, catalog: UpgradeCatalog):
        self.totals_checker = MonotonicTotalsChecker()
        self._checkers = (
            CurrencyBalanceChecker(),
            OwnedUpgradesChecker(catalog),
            MultiplierConsistencyChecker(catalog),
            self.totals_checker,
        )

    def check_all(self, state: GameState,
                  raise_on_violation: bool = False) -> Dict[InvariantType, InvariantCheckResult]:
        """检查所有不变量

        Args:
            state: 游戏状态
            raise_on_violation: 是否在出现严重违反时抛出异常

        Returns:
            Dict[InvariantType, InvariantCheckResult]: 检查结果字典

        Raises:
            InvariantError: 当raise_on_violation=True且有严重违反时
        """
        results = {checker.invariant_type: checker.check(state) for checker in self._checkers}

        if raise_on_violation:
            critical = [v for result in results.values() for v in result.critical]
            if critical:
                violations = [v for result in results.values() for v in result.violations]
                raise InvariantError(f"发现{len(critical)}个严重不变量违反", violations)
        return results

    def is_valid(self, state: GameState) -> bool:
        return all(result.is_valid for result in self.check_all(state).values())

    def reset_baseline(self) -> None:
        self.totals_checker.reset_baseline()
