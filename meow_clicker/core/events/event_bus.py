"""
事件总线

同步的发布与订阅：处理器在发布者的调用栈上依次执行。处理器抛出的异常
只记录日志，不影响其他处理器，也不会传播给发布者。
"""

from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable, List, Optional
import logging

from .domain_events import DomainEvent, EventType

__all__ = ['EventHandler', 'EventBus', 'only']

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


def only(event_types: Iterable[EventType], handler: EventHandler) -> EventHandler:
    """
    包装处理器，只转发指定类型的事件

    Args:
        event_types: 关心的事件类型
        handler: 被包装的处理器

    Returns:
        EventHandler: 过滤后的处理器
    """
    wanted = frozenset(event_types)

    def _filtered(event: DomainEvent) -> None:
        if event.event_type in wanted:
            handler(event)

    return _filtered


class EventBus:
    """同步事件总线"""

    def __init__(self, max_history_size: int = 1000):
        """
        初始化事件总线

        Args:
            max_history_size: 保留的最近事件条数
        """
        self._handlers: Dict[EventType, List[EventHandler]] = defaultdict(list)
        self._wildcard: List[EventHandler] = []
        self._history: Deque[DomainEvent] = deque(maxlen=max_history_size)

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        self._wildcard.append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """
        取消订阅

        Returns:
            bool: 处理器原先是否已订阅
        """
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def publish(self, event: DomainEvent) -> None:
        self._history.append(event)
        logger.debug(f"发布事件 {event.event_type.name} ({event.session_id})")
        for handler in self._handlers[event.event_type] + self._wildcard:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"事件处理器执行失败 {event.event_type.name}: {e}", exc_info=True)

    def get_event_history(self,
                          event_type: Optional[EventType] = None,
                          session_id: Optional[str] = None,
                          limit: Optional[int] = None) -> List[DomainEvent]:
        """
        查询事件历史

        Args:
            event_type: 按事件类型过滤
            session_id: 按会话过滤
            limit: 只返回最近的若干条

        Returns:
            List[DomainEvent]: 按发布顺序排列的事件
        """
        events = [
            e for e in self._history
            if (event_type is None or e.event_type == event_type)
            and (session_id is None or e.session_id == session_id)
        ]
        if limit:
            events = events[-limit:]
        return events

    def clear_history(self) -> None:
        self._history.clear()

    def get_handler_count(self, event_type: Optional[EventType] = None) -> int:
        """event_type为None时返回通配处理器数量"""
        if event_type is None:
            return len(self._wildcard)
        return len(self._handlers[event_type])
