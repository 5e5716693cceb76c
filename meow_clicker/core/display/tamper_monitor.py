"""
显示篡改监控

周期性读回渲染的余额文本，与根据规范状态重新格式化的期望值比较。
不一致时计数、自愈（覆盖回期望值），计数超过阈值后触发锁定。
计数在会话内只增不减，以区分偶发渲染故障和持续的手动编辑。
"""

import logging

from ..lock.lock_controller import LockController, LockReason
from ..state.types import GameState
from .formatting import format_amount, normalize_rendered
from .surface import DisplayElements, DisplaySurface

__all__ = ['DisplayTamperMonitor', 'TAMPER_LOCK_NOTICE']

logger = logging.getLogger(__name__)

TAMPER_LOCK_NOTICE = 'Multiple tampering attempts detected. Account locked.'


class DisplayTamperMonitor:
    """显示篡改监控"""

    def __init__(self, lock: LockController, surface: DisplaySurface,
                 threshold: int = 3, element_id: str = DisplayElements.MEOWS):
        """
        初始化篡改监控

        Args:
            lock: 锁定控制器
            surface: 渲染表面
            threshold: 篡改次数阈值，超过即锁定
            element_id: 被监控的元素ID
        """
        self._lock = lock
        self._surface = surface
        self._threshold = threshold
        self._element_id = element_id
        self._tamper_count = 0

    @property
    def tamper_count(self) -> int:
        return self._tamper_count

    def check(self, state: GameState) -> bool:
        """
        比较渲染值与期望值

        Args:
            state: 规范游戏状态

        Returns:
            bool: 渲染值与期望一致时返回True
        """
        expected = format_amount(state.meows)
        displayed = normalize_rendered(self._surface.read(self._element_id) or '')
        if displayed == normalize_rendered(expected):
            return True

        self._tamper_count += 1
        logger.warning(
            f"显示值与状态不一致: displayed={displayed!r} expected={expected!r} "
            f"count={self._tamper_count}"
        )
        self._surface.render(self._element_id, expected)

        if self._tamper_count > self._threshold:
            self._lock.trip(LockReason.DISPLAY_TAMPER, TAMPER_LOCK_NOTICE)
        return False
