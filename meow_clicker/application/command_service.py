"""
Clicker Command Service - 游戏命令服务

处理所有改变游戏状态的操作，是唯一认可的写入路径。
命令服务负责：
- 点击准入与喵币发放
- 升级购买与重置
- 抛硬币下注与延迟揭晓
- 活跃时长统计
- 持久化、刷新显示、发布领域事件

每个改变状态的入口都先检查锁定状态，锁定时拒绝执行并提示用户。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging
import math

from .types import CommandResult
from .notifier import Notifier
from .display_presenter import DisplayPresenter
from .validation_service import ValidationService
from ..core.casino import CasinoLog, CoinflipGame, CoinSide, PendingBet
from ..core.display import DisplayTamperMonitor
from ..core.events import DomainEvent, EventBus, EventType
from ..core.guard import ClickDecision, ClickRateGuard, RATE_LOCK_NOTICE
from ..core.lock import LockController
from ..core.scheduler import CooperativeScheduler
from ..core.shop import PurchaseOutcome, UpgradeCatalog, purchase, reset_upgrades
from ..core.state import GameState, round6
from ..core.storage import PersistentStateStore

logger = logging.getLogger(__name__)


@dataclass
class ClickerSession:
    """
    游戏会话

    进程内唯一的应用状态结构：规范状态、锁定标志、篡改计数等都显式挂在这里，
    各组件通过引用访问，不读取全局变量。
    """
    session_id: str
    state: GameState
    lock: LockController
    guard: ClickRateGuard
    tamper_monitor: DisplayTamperMonitor
    store: PersistentStateStore
    scheduler: CooperativeScheduler
    event_bus: EventBus
    notifier: Notifier
    presenter: DisplayPresenter
    catalog: UpgradeCatalog
    coinflip: CoinflipGame
    casino_log: CasinoLog = field(default_factory=CasinoLog)
    active_since_ms: Optional[int] = None
    pending_bets: Dict[int, PendingBet] = field(default_factory=dict)

    def now_ms(self) -> int:
        return self.scheduler.now_ms()


class ClickerCommandService:
    """游戏命令服务"""

    def __init__(self, session: ClickerSession, validation_service: ValidationService):
        """
        初始化命令服务

        Args:
            session: 游戏会话
            validation_service: 验证服务
        """
        self._session = session
        self._validation = validation_service

    @property
    def session(self) -> ClickerSession:
        return self._session

    def _refuse_if_locked(self) -> Optional[CommandResult]:
        notice = self._session.lock.ensure_unlocked()
        if notice is None:
            return None
        self._session.notifier.alert(notice)
        return CommandResult.locked(notice)

    def _commit(self) -> str:
        """持久化并刷新显示"""
        digest = self._session.store.save(self._session.state)
        self._session.presenter.refresh(self._session.state)
        return digest

    def _publish(self, event_type: EventType, data: Dict[str, Any],
                 correlation_id: Optional[str] = None) -> None:
        self._session.event_bus.publish(
            DomainEvent.create(event_type, self._session.session_id, data, correlation_id)
        )

    def click(self) -> CommandResult:
        """
        登记一次点击

        Returns:
            命令执行结果：冷却期内的点击返回CLICK_COOLDOWN且不提示用户
        """
        refused = self._refuse_if_locked()
        if refused:
            return refused

        try:
            session = self._session
            now = session.now_ms()
            decision = session.guard.register(now)
            session.presenter.render_rate(session.guard.current_rate)

            if decision == ClickDecision.COOLDOWN:
                self._publish(EventType.CLICK_DISCARDED, {'at_ms': now})
                return CommandResult.failure_result("", error_code="CLICK_COOLDOWN")

            if decision in (ClickDecision.RATE_EXCEEDED, ClickDecision.LOCKED):
                return CommandResult.locked(RATE_LOCK_NOTICE)

            state = session.state
            gain = round6(1 * state.multiplier)
            state.meows = round6(state.meows + gain)
            state.total_earned = int(math.floor(state.total_earned + gain))
            self._commit()
            self._publish(EventType.CLICK_ADMITTED, {'gain': gain, 'meows': state.meows})

            return CommandResult.success_result(
                message="点击成功",
                data={'gain': gain, 'meows': state.meows, 'total_earned': state.total_earned}
            )

        except Exception as e:
            logger.error(f"点击处理失败: {e}", exc_info=True)
            return CommandResult.failure_result(f"点击处理失败: {str(e)}", error_code="CLICK_FAILED")

    def buy_upgrade(self, upgrade_id: str) -> CommandResult:
        """
        购买一次性升级

        Args:
            upgrade_id: 升级ID

        Returns:
            命令执行结果
        """
        refused = self._refuse_if_locked()
        if refused:
            return refused

        try:
            session = self._session
            validation = self._validation.validate_purchase(session.state, upgrade_id).data
            if not validation.is_valid:
                message = validation.first_message
                session.casino_log.post(message)
                return CommandResult.validation_error(message, error_code=validation.errors[0].error_type.upper())

            outcome = purchase(session.state, session.catalog, upgrade_id)
            if outcome != PurchaseOutcome.PURCHASED:
                return CommandResult.business_rule_violation(
                    f"购买失败: {outcome.name}", error_code=outcome.name
                )

            self._commit()
            upgrade = session.catalog.get(upgrade_id)
            logger.info(f"已购买升级 {upgrade_id}，倍率 {session.state.multiplier}")
            self._publish(EventType.UPGRADE_PURCHASED, {
                'upgrade_id': upgrade_id,
                'price': upgrade.price,
                'multiplier': session.state.multiplier,
            })
            return CommandResult.success_result(
                message=f"已购买 {upgrade.title}",
                data={'upgrade_id': upgrade_id, 'multiplier': session.state.multiplier}
            )

        except Exception as e:
            logger.error(f"购买升级失败: {e}", exc_info=True)
            return CommandResult.failure_result(f"购买升级失败: {str(e)}", error_code="PURCHASE_FAILED")

    def reset_upgrades(self) -> CommandResult:
        """清空已拥有升级，倍率恢复为1.0，累计统计不变"""
        refused = self._refuse_if_locked()
        if refused:
            return refused

        try:
            previous = list(self._session.state.owned)
            reset_upgrades(self._session.state)
            self._commit()
            self._publish(EventType.UPGRADES_RESET, {'removed': previous})
            return CommandResult.success_result(message="升级已重置", data={'removed': previous})
        except Exception as e:
            logger.error(f"重置升级失败: {e}", exc_info=True)
            return CommandResult.failure_result(f"重置升级失败: {str(e)}", error_code="RESET_FAILED")

    def place_bet(self, pick: Any, raw_bet: Any) -> CommandResult:
        """
        抛硬币下注

        下注额立即扣除并计入累计花费，结果在固定延迟后由调度器揭晓。

        Args:
            pick: 玩家选择（'heads' / 'tails' 或 CoinSide）
            raw_bet: 用户输入的下注额，向下取整

        Returns:
            命令执行结果
        """
        refused = self._refuse_if_locked()
        if refused:
            return refused

        try:
            session = self._session
            try:
                side = CoinSide.parse(pick)
            except ValueError as e:
                return CommandResult.validation_error(str(e), error_code="INVALID_PICK")

            bet_check = self._validation.validate_bet(raw_bet, session.state.meows).data
            if not bet_check.result.is_valid:
                message = bet_check.result.first_message
                session.casino_log.post(message)
                return CommandResult.validation_error(message, error_code="INVALID_BET")

            pending = session.coinflip.place(session.state, side, bet_check.amount)
            session.pending_bets[pending.bet_id] = pending
            self._commit()
            session.casino_log.post(f"You bet {pending.amount} meows on {side.value}. Flipping...")

            session.scheduler.call_later(
                session.coinflip.rules.resolve_delay_ms,
                lambda: self._settle_bet(pending.bet_id),
                name=f"settle_bet_{pending.bet_id}",
            )
            self._publish(EventType.BET_PLACED, {
                'bet_id': pending.bet_id,
                'pick': side.value,
                'amount': pending.amount,
            }, correlation_id=f"bet_{pending.bet_id}")

            return CommandResult.success_result(
                message=f"已下注 {pending.amount}",
                data={'bet_id': pending.bet_id, 'amount': pending.amount, 'meows': session.state.meows}
            )

        except Exception as e:
            logger.error(f"下注失败: {e}", exc_info=True)
            return CommandResult.failure_result(f"下注失败: {str(e)}", error_code="BET_FAILED")

    def _settle_bet(self, bet_id: int) -> None:
        # 下注在锁定之前已被接受，揭晓照常进行，避免玩家损失已扣的下注额
        session = self._session
        pending = session.pending_bets.pop(bet_id, None)
        if pending is None:
            return
        outcome = session.coinflip.settle(session.state, pending)
        if outcome.won:
            self._commit()
            session.casino_log.post(
                f"🎉 You won! It was {pending.result.value}. You receive {outcome.payout} meows."
            )
        else:
            session.presenter.refresh(session.state)
            session.casino_log.post(f"😿 You lost. It was {pending.result.value}.")

        self._publish(EventType.BET_SETTLED, {
            'bet_id': bet_id,
            'won': outcome.won,
            'payout': outcome.payout,
            'result': pending.result.value,
        }, correlation_id=f"bet_{bet_id}")

    def start_active_timer(self) -> None:
        """视图进入前台时开始计时"""
        if self._session.active_since_ms is not None:
            return
        self._session.active_since_ms = self._session.now_ms()

    def stop_active_timer(self) -> int:
        """
        视图进入后台时停止计时，把完整秒数计入活跃时长

        Returns:
            int: 本次计入的秒数
        """
        session = self._session
        if session.active_since_ms is None:
            return 0
        delta = max(0, (session.now_ms() - session.active_since_ms) // 1000)
        session.active_since_ms = None
        session.state.active_time_seconds += delta
        session.store.save(session.state)
        return delta

    def set_visibility(self, visible: bool) -> None:
        """处理视图可见性变化"""
        if visible:
            self.start_active_timer()
        else:
            self.stop_active_timer()
