"""
锁定控制器

进程级布尔闸门。一旦触发，会话内所有改变状态的操作都会被拒绝，
只有重新加载运行时（重新从持久化存储初始化）才能清除。
"""

from enum import Enum, auto
from typing import Callable, List, Optional
import logging
import time

__all__ = ['LockReason', 'LockController', 'DEFAULT_LOCK_NOTICE']

logger = logging.getLogger(__name__)

DEFAULT_LOCK_NOTICE = 'Account locked due to suspicious activity.'


class LockReason(Enum):
    """锁定原因"""
    CLICK_RATE = auto()       # 点击频率超限
    DISPLAY_TAMPER = auto()   # 显示被反复篡改
    INTEGRITY = auto()        # 周期性完整性校验失败


class LockController:
    """
    锁定控制器

    状态：unlocked（初始）-> locked（会话内终态）。没有解锁操作。
    """

    def __init__(self, notice: str = DEFAULT_LOCK_NOTICE):
        self._locked = False
        self._reason: Optional[LockReason] = None
        self._locked_at: Optional[float] = None
        self._notice = notice
        self._listeners: List[Callable[[LockReason, str], None]] = []

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def reason(self) -> Optional[LockReason]:
        return self._reason

    @property
    def locked_at(self) -> Optional[float]:
        return self._locked_at

    def on_trip(self, callback: Callable[[LockReason, str], None]) -> None:
        """注册锁定回调，仅在unlocked->locked转换时调用一次"""
        self._listeners.append(callback)

    def trip(self, reason: LockReason, message: str = "") -> bool:
        """
        触发锁定

        Args:
            reason: 锁定原因
            message: 面向用户的提示

        Returns:
            bool: 本次调用是否完成了unlocked->locked转换；已锁定时返回False
        """
        if self._locked:
            return False
        self._locked = True
        self._reason = reason
        self._locked_at = time.time()
        logger.warning(f"会话已锁定: {reason.name} {message}")
        for callback in list(self._listeners):
            try:
                callback(reason, message)
            except Exception as e:
                logger.error(f"锁定回调执行失败: {e}", exc_info=True)
        return True

    def ensure_unlocked(self) -> Optional[str]:
        """
        检查锁定状态

        Returns:
            Optional[str]: 已锁定时返回面向用户的提示，否则返回None
        """
        if self._locked:
            return self._notice
        return None
