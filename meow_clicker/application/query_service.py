"""
Clicker Query Service - 游戏查询服务

只读操作：状态视图、商店视图、导出数据、锁定状态。
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .types import QueryResult
from .command_service import ClickerSession
from ..core.display import format_amount, format_duration, format_multiplier, format_rate
from ..core.state import StateSerializer


@dataclass(frozen=True)
class StateView:
    """格式化的状态视图"""
    meows: str
    multiplier: str
    total_earned: str
    total_spent: str
    time_played: str
    clicks_per_sec: str
    owned: List[str]
    locked: bool


@dataclass(frozen=True)
class ShopItemView:
    """商店条目视图"""
    id: str
    title: str
    desc: str
    price: int
    owned: bool
    affordable: bool


@dataclass(frozen=True)
class LockStatus:
    """锁定状态"""
    locked: bool
    reason: Optional[str]
    tamper_count: int


class ClickerQueryService:
    """游戏查询服务"""

    def __init__(self, session: ClickerSession):
        self._session = session

    def get_time_played(self) -> int:
        """累计活跃秒数，包括当前正在计时的区间"""
        session = self._session
        seconds = session.state.active_time_seconds
        if session.active_since_ms is not None:
            seconds += max(0, (session.now_ms() - session.active_since_ms) // 1000)
        return seconds

    def get_state_view(self) -> QueryResult[StateView]:
        session = self._session
        state = session.state
        view = StateView(
            meows=format_amount(state.meows),
            multiplier=format_multiplier(state.multiplier),
            total_earned=format_amount(state.total_earned),
            total_spent=format_amount(state.total_spent),
            time_played=format_duration(self.get_time_played()),
            clicks_per_sec=format_rate(session.guard.current_rate),
            owned=list(state.owned),
            locked=session.lock.is_locked,
        )
        return QueryResult.success_result(view)

    def get_shop_view(self) -> QueryResult[List[ShopItemView]]:
        state = self._session.state
        items = [
            ShopItemView(
                id=upgrade.id,
                title=upgrade.title,
                desc=upgrade.desc,
                price=upgrade.price,
                owned=upgrade.id in state.owned,
                affordable=state.meows >= upgrade.price,
            )
            for upgrade in self._session.catalog
        ]
        return QueryResult.success_result(items)

    def get_export_payload(self) -> QueryResult[Dict[str, Any]]:
        return QueryResult.success_result(StateSerializer.export_stats(self._session.state))

    def get_lock_status(self) -> QueryResult[LockStatus]:
        lock = self._session.lock
        status = LockStatus(
            locked=lock.is_locked,
            reason=lock.reason.name if lock.reason else None,
            tamper_count=self._session.tamper_monitor.tamper_count,
        )
        return QueryResult.success_result(status)

    def get_casino_log(self) -> QueryResult[List[str]]:
        return QueryResult.success_result(self._session.casino_log.entries())
