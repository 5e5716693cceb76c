"""
领域事件

会话内发生的、外部可能关心的事实：点击、购买、下注、保存与反作弊判定。
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional
import time
import uuid

__all__ = ['EventType', 'DomainEvent']


class EventType(Enum):
    """事件类型"""
    CLICK_ADMITTED = auto()
    CLICK_DISCARDED = auto()

    UPGRADE_PURCHASED = auto()
    UPGRADES_RESET = auto()

    BET_PLACED = auto()
    BET_SETTLED = auto()

    STATE_SAVED = auto()
    STATE_RESET = auto()

    INTEGRITY_FAILED = auto()
    DISPLAY_TAMPERED = auto()
    SESSION_LOCKED = auto()


@dataclass(frozen=True)
class DomainEvent:
    """
    领域事件

    Attributes:
        event_type: 事件类型
        session_id: 产生事件的会话
        data: 事件数据
        correlation_id: 关联ID，下注与揭晓共用同一个
        event_id: 事件唯一标识
        occurred_at: 发生时间（Unix秒）
    """
    event_type: EventType
    session_id: str
    data: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None
    event_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    occurred_at: float = field(default_factory=time.time)

    @classmethod
    def create(cls, event_type: EventType, session_id: str, data: Dict[str, Any],
               correlation_id: Optional[str] = None) -> 'DomainEvent':
        return cls(event_type=event_type, session_id=session_id, data=dict(data),
                   correlation_id=correlation_id)

    def to_dict(self) -> Dict[str, Any]:
        """转换为可JSON序列化的字典"""
        return {
            'event_id': self.event_id,
            'event_type': self.event_type.name,
            'session_id': self.session_id,
            'occurred_at': self.occurred_at,
            'data': self.data,
            'correlation_id': self.correlation_id,
        }
