#!/usr/bin/env python3
"""
ValidationService - 验证服务

负责集中化管理所有用户输入和状态验证，包括：
- 下注额验证
- 升级购买验证
- 状态不变量检查

验证失败只产生面向用户的消息，不改变状态，也不触发锁定。
"""

import logging
from typing import Any, List, Optional
from dataclasses import dataclass, field

from .types import QueryResult
from .config_service import CasinoConfig
from ..core.casino import CoinflipRules, parse_bet_amount, validate_bet
from ..core.invariant import StateInvariants
from ..core.shop import UpgradeCatalog
from ..core.state import GameState


@dataclass
class ValidationError:
    """验证错误信息"""
    rule_name: str
    error_type: str
    message: str
    severity: str = "error"
    expected_value: Any = None
    actual_value: Any = None


@dataclass
class ValidationResult:
    """验证结果"""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)

    @classmethod
    def success(cls) -> 'ValidationResult':
        return cls(is_valid=True, errors=[])

    @classmethod
    def failure(cls, errors: List[ValidationError]) -> 'ValidationResult':
        return cls(is_valid=False, errors=errors)

    @property
    def first_message(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None


@dataclass
class BetValidation:
    """下注验证结果"""
    amount: int
    result: ValidationResult


class ValidationService:
    """验证服务"""

    def __init__(self, catalog: UpgradeCatalog, casino_config: Optional[CasinoConfig] = None):
        """
        初始化验证服务

        Args:
            catalog: 升级目录
            casino_config: 赌场配置
        """
        self.logger = logging.getLogger(__name__)
        self._catalog = catalog
        casino_config = casino_config or CasinoConfig()
        self._rules = CoinflipRules(
            min_bet=casino_config.min_bet,
            max_bet=casino_config.max_bet,
            resolve_delay_ms=casino_config.resolve_delay_ms,
        )
        self._invariants = StateInvariants(catalog)

    @property
    def coinflip_rules(self) -> CoinflipRules:
        return self._rules

    def validate_bet(self, raw_bet: Any, balance: float) -> QueryResult[BetValidation]:
        """
        验证下注额

        Args:
            raw_bet: 用户输入（数值或字符串），向下取整
            balance: 当前余额

        Returns:
            查询结果，包含取整后的下注额与验证结果
        """
        amount = parse_bet_amount(raw_bet)
        message = validate_bet(amount, balance, self._rules)
        if message is None:
            return QueryResult.success_result(BetValidation(amount, ValidationResult.success()))

        self.logger.debug(f"下注被拒绝: amount={amount} balance={balance} reason={message}")
        error = ValidationError(
            rule_name="bet_bounds",
            error_type="invalid_bet",
            message=message,
            expected_value=(self._rules.min_bet, min(self._rules.max_bet, balance)),
            actual_value=amount,
        )
        return QueryResult.success_result(BetValidation(amount, ValidationResult.failure([error])))

    def validate_purchase(self, state: GameState, upgrade_id: str) -> QueryResult[ValidationResult]:
        """
        验证升级购买

        Returns:
            查询结果，包含验证结果
        """
        upgrade = self._catalog.get(upgrade_id)
        errors = []
        if upgrade is None:
            errors.append(ValidationError(
                rule_name="upgrade_exists",
                error_type="unknown_item",
                message=f"Unknown upgrade: {upgrade_id}",
                actual_value=upgrade_id,
            ))
        elif upgrade_id in state.owned:
            errors.append(ValidationError(
                rule_name="one_time_purchase",
                error_type="already_owned",
                message=f"{upgrade.title} is already owned.",
                actual_value=upgrade_id,
            ))
        elif state.meows < upgrade.price:
            errors.append(ValidationError(
                rule_name="affordable",
                error_type="insufficient_funds",
                message="Not enough meows to buy that upgrade.",
                expected_value=upgrade.price,
                actual_value=state.meows,
            ))

        if errors:
            return QueryResult.success_result(ValidationResult.failure(errors))
        return QueryResult.success_result(ValidationResult.success())

    def validate_state(self, state: GameState) -> QueryResult[ValidationResult]:
        """检查状态不变量"""
        errors = []
        for invariant_type, check in self._invariants.check_all(state).items():
            for violation in check.violations:
                errors.append(ValidationError(
                    rule_name=invariant_type.name.lower(),
                    error_type="invariant_violation",
                    message=violation.description,
                    severity=violation.severity.value,
                ))
        if errors:
            self.logger.warning(f"状态不变量违反: {[e.message for e in errors]}")
            return QueryResult.success_result(ValidationResult.failure(errors))
        return QueryResult.success_result(ValidationResult.success())
