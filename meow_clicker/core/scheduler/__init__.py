"""
Scheduler Module - 协作式调度

Classes:
    CooperativeScheduler: 单线程定时任务调度器
    SystemClock: 系统时钟
    ManualClock: 手动时钟
"""

from .clock import Clock, SystemClock, ManualClock
from .cooperative_scheduler import ScheduledTask, CooperativeScheduler

__all__ = [
    'Clock',
    'SystemClock',
    'ManualClock',
    'ScheduledTask',
    'CooperativeScheduler',
]
