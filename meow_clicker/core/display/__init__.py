"""
Display Module - 显示与篡改监控

Classes:
    DisplayTamperMonitor: 显示篡改监控
    InMemoryDisplaySurface: 内存渲染表面
    DisplayElements: 渲染元素ID

Functions:
    format_amount, format_multiplier, format_duration, format_rate, normalize_rendered
"""

from .formatting import (
    format_amount,
    format_multiplier,
    format_duration,
    format_rate,
    normalize_rendered,
)
from .surface import DisplayElements, DisplaySurface, InMemoryDisplaySurface
from .tamper_monitor import DisplayTamperMonitor, TAMPER_LOCK_NOTICE

__all__ = [
    'format_amount',
    'format_multiplier',
    'format_duration',
    'format_rate',
    'normalize_rendered',
    'DisplayElements',
    'DisplaySurface',
    'InMemoryDisplaySurface',
    'DisplayTamperMonitor',
    'TAMPER_LOCK_NOTICE',
]
