"""
Guard Module - 点击频率防护

Classes:
    ClickRateGuard: 冷却 + 频率窗口的两级点击闸门
    ClickDecision: 点击判定结果
"""

from .click_rate_guard import ClickDecision, ClickRateGuard, RATE_LOCK_NOTICE

__all__ = ['ClickDecision', 'ClickRateGuard', 'RATE_LOCK_NOTICE']
