"""
点击频率防护

两级闸门：
1. 硬冷却：距上次计入窗口的点击不足冷却时间的点击被静默丢弃，不计入窗口
2. 频率窗口：统计尾部时间窗口内的点击，平均频率超过阈值即触发锁定

冷却拦截单次双击和最简单的脚本连点；频率窗口拦截遵守（或略微超出）冷却、
但长期保持超人平均频率的脚本连点器。
"""

from collections import deque
from enum import Enum, auto
from typing import Deque, Optional
import logging

from ..lock.lock_controller import LockController, LockReason

__all__ = ['ClickDecision', 'ClickRateGuard', 'RATE_LOCK_NOTICE']

logger = logging.getLogger(__name__)

RATE_LOCK_NOTICE = 'Suspicious click activity detected — account locked. Refresh to attempt reload.'


class ClickDecision(Enum):
    """点击判定结果"""
    ADMITTED = auto()        # 准入，可以发放喵币
    COOLDOWN = auto()        # 冷却期内，静默丢弃
    RATE_EXCEEDED = auto()   # 频率超限，已触发锁定
    LOCKED = auto()          # 会话已锁定


class ClickRateGuard:
    """点击频率防护"""

    def __init__(self, lock: LockController, cooldown_ms: int = 200,
                 window_ms: int = 2000, max_rate: float = 7.0):
        """
        初始化点击频率防护

        Args:
            lock: 锁定控制器
            cooldown_ms: 最小点击间隔（毫秒）
            window_ms: 频率统计窗口（毫秒）
            max_rate: 每秒点击数阈值，超过即锁定
        """
        if cooldown_ms < 0:
            raise ValueError("cooldown_ms不能为负数")
        if window_ms <= 0:
            raise ValueError("window_ms必须为正数")
        self._lock = lock
        self._cooldown_ms = cooldown_ms
        self._window_ms = window_ms
        self._max_rate = max_rate
        self._window: Deque[int] = deque()
        self._last_click_at: Optional[int] = None

    @property
    def window_size(self) -> int:
        return len(self._window)

    @property
    def current_rate(self) -> float:
        """最近一次清理后的每秒点击数"""
        return len(self._window) / (self._window_ms / 1000.0)

    def register(self, now_ms: int) -> ClickDecision:
        """
        登记一次点击尝试

        Args:
            now_ms: 当前时间（毫秒）

        Returns:
            ClickDecision: 判定结果
        """
        if self._lock.is_locked:
            return ClickDecision.LOCKED

        if self._last_click_at is not None and now_ms - self._last_click_at < self._cooldown_ms:
            return ClickDecision.COOLDOWN

        self._last_click_at = now_ms
        self._window.append(now_ms)
        rate = self.rate(now_ms)

        if rate > self._max_rate:
            logger.warning(f"点击频率异常: {rate:.1f}/s > {self._max_rate}/s")
            self._lock.trip(LockReason.CLICK_RATE, RATE_LOCK_NOTICE)
            return ClickDecision.RATE_EXCEEDED

        return ClickDecision.ADMITTED

    def tick(self, now_ms: int) -> float:
        """周期性清理过期记录，返回当前频率"""
        return self.rate(now_ms)

    def rate(self, now_ms: int) -> float:
        """清理窗口外的记录并计算每秒点击数"""
        cutoff = now_ms - self._window_ms
        while self._window and self._window[0] <= cutoff:
            self._window.popleft()
        return self.current_rate
