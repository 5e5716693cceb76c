"""
Events Module - 领域事件

Classes:
    DomainEvent: 领域事件
    EventType: 事件类型枚举
    EventBus: 同步事件总线

Functions:
    only: 按事件类型过滤的处理器包装
"""

from .domain_events import EventType, DomainEvent
from .event_bus import EventHandler, EventBus, only

__all__ = [
    'EventType',
    'DomainEvent',
    'EventHandler',
    'EventBus',
    'only',
]
