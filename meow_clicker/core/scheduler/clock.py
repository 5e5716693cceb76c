"""
时钟

所有时间均以毫秒整数表示。
"""

from typing import Protocol
import time

__all__ = ['Clock', 'SystemClock', 'ManualClock']


class Clock(Protocol):
    """时钟协议"""

    def now_ms(self) -> int:
        ...


class SystemClock:
    """基于单调时钟的系统时钟"""

    def now_ms(self) -> int:
        return int(time.monotonic() * 1000)


class ManualClock:
    """手动推进的时钟，用于测试和确定性回放"""

    def __init__(self, start_ms: int = 0):
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def set(self, now_ms: int) -> None:
        if now_ms < self._now:
            raise ValueError(f"时钟不能倒退: {now_ms} < {self._now}")
        self._now = now_ms

    def advance(self, delta_ms: int) -> int:
        self.set(self._now + delta_ms)
        return self._now
