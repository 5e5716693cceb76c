"""
Lock Module - 会话锁定

Classes:
    LockController: 锁定控制器
    LockReason: 锁定原因枚举
"""

from .lock_controller import LockReason, LockController, DEFAULT_LOCK_NOTICE

__all__ = ['LockReason', 'LockController', 'DEFAULT_LOCK_NOTICE']
