"""
协作式调度器

单线程、非重入地执行定时任务：所有任务都是短小的非阻塞处理函数，
按到期时间依次执行（同一时间按登记顺序），一次只执行一个。
周期任务各自按固定周期独立触发，会话期间不取消。长时间未执行时，
错过的多次触发合并为一次。
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
import heapq
import itertools
import logging

from .clock import Clock, ManualClock

__all__ = ['ScheduledTask', 'CooperativeScheduler']

logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    """定时任务"""
    name: str
    callback: Callable[[], None]
    due_ms: int
    period_ms: Optional[int] = None
    run_count: int = field(default=0)

    @property
    def is_periodic(self) -> bool:
        return self.period_ms is not None


class CooperativeScheduler:
    """协作式定时任务调度器"""

    def __init__(self, clock: Clock):
        self._clock = clock
        self._queue: List[Tuple[int, int, ScheduledTask]] = []
        self._sequence = itertools.count()
        self._running = False
        self._shutdown = False

    @property
    def clock(self) -> Clock:
        return self._clock

    def now_ms(self) -> int:
        return self._clock.now_ms()

    def call_later(self, delay_ms: int, callback: Callable[[], None], name: str = "") -> ScheduledTask:
        """
        登记一次性任务

        Args:
            delay_ms: 延迟（毫秒）
            callback: 回调
            name: 任务名称，用于日志

        Returns:
            ScheduledTask: 登记的任务
        """
        if delay_ms < 0:
            raise ValueError("delay_ms不能为负数")
        task = ScheduledTask(name=name or callback.__name__, callback=callback,
                             due_ms=self.now_ms() + delay_ms)
        self._push(task)
        return task

    def call_every(self, period_ms: int, callback: Callable[[], None], name: str = "") -> ScheduledTask:
        """登记周期任务，首次在一个周期后触发"""
        if period_ms <= 0:
            raise ValueError("period_ms必须为正数")
        task = ScheduledTask(name=name or callback.__name__, callback=callback,
                             due_ms=self.now_ms() + period_ms, period_ms=period_ms)
        self._push(task)
        return task

    def _push(self, task: ScheduledTask) -> None:
        if self._shutdown:
            raise RuntimeError("调度器已关闭")
        heapq.heappush(self._queue, (task.due_ms, next(self._sequence), task))

    def next_due_ms(self) -> Optional[int]:
        return self._queue[0][0] if self._queue else None

    def pending(self) -> List[str]:
        """按到期顺序列出待执行任务名称"""
        return [task.name for _, _, task in sorted(self._queue)]

    def run_due(self) -> int:
        """
        执行所有已到期任务

        Returns:
            int: 执行的任务数量
        """
        if self._running:
            # 非重入：回调内部再次调用时直接返回
            return 0
        self._running = True
        executed = 0
        try:
            now = self.now_ms()
            while self._queue and self._queue[0][0] <= now:
                self._run_next()
                executed += 1
        finally:
            self._running = False
        return executed

    def advance(self, delta_ms: int) -> int:
        """
        推进手动时钟并依次执行途中到期的任务

        每个任务执行时时钟恰好停在它的到期时间。

        Args:
            delta_ms: 推进的毫秒数

        Returns:
            int: 执行的任务数量
        """
        if not isinstance(self._clock, ManualClock):
            raise TypeError("advance仅支持ManualClock")
        target = self._clock.now_ms() + delta_ms
        executed = 0
        self._running = True
        try:
            while self._queue and self._queue[0][0] <= target:
                self._clock.set(max(self._queue[0][0], self._clock.now_ms()))
                self._run_next()
                executed += 1
        finally:
            self._running = False
        self._clock.set(target)
        return executed

    def _run_next(self) -> None:
        due, _, task = heapq.heappop(self._queue)
        try:
            task.callback()
        except Exception as e:
            logger.error(f"定时任务 {task.name} 执行失败: {e}", exc_info=True)
        finally:
            task.run_count += 1
            if task.is_periodic and not self._shutdown:
                task.due_ms = self._next_due(due, task.period_ms)
                self._push(task)

    def _next_due(self, due: int, period: int) -> int:
        """下一个严格晚于当前时间的周期点；错过的周期合并为一次，不补跑"""
        missed = max(0, self.now_ms() - due) // period
        return due + (missed + 1) * period

    def shutdown(self) -> None:
        """关闭调度器并丢弃所有任务"""
        self._shutdown = True
        self._queue.clear()
