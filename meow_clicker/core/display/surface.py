"""
渲染表面

核心层向渲染表面推送格式化文本，显示篡改监控再从中读回。
"""

from typing import Dict, Optional, Protocol

__all__ = ['DisplayElements', 'DisplaySurface', 'InMemoryDisplaySurface']


class DisplayElements:
    """渲染元素ID"""
    MEOWS = 'meow-display'
    MULTIPLIER = 'multiplier'
    OWNED_MULT = 'owned-mult'
    OWNED_LIST = 'owned-list'
    CLICKS_PER_SEC = 'clicks-ps'
    TOTAL_EARNED = 'stat-total-earned'
    TOTAL_SPENT = 'stat-total-spent'
    TIME_PLAYED = 'stat-time-played'


class DisplaySurface(Protocol):
    """渲染表面协议"""

    def render(self, element_id: str, text: str) -> None:
        ...

    def read(self, element_id: str) -> Optional[str]:
        ...


class InMemoryDisplaySurface:
    """内存渲染表面，任何人都可以直接改写其中的文本"""

    def __init__(self):
        self._elements: Dict[str, str] = {}

    def render(self, element_id: str, text: str) -> None:
        self._elements[element_id] = text

    def read(self, element_id: str) -> Optional[str]:
        return self._elements.get(element_id)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._elements)
