"""
通知表面

面向用户的提示（锁定提示、完整性提示等）。
"""

from typing import List, Protocol
import logging

__all__ = ['Notifier', 'CollectingNotifier', 'LoggingNotifier']


class Notifier(Protocol):
    """通知协议"""

    def alert(self, message: str) -> None:
        ...


class CollectingNotifier:
    """收集所有提示，供UI轮询展示或测试断言"""

    def __init__(self):
        self.messages: List[str] = []

    def alert(self, message: str) -> None:
        self.messages.append(message)

    def drain(self) -> List[str]:
        """取出并清空所有提示"""
        messages, self.messages = self.messages, []
        return messages


class LoggingNotifier:
    """把提示写入日志"""

    def __init__(self, logger_name: str = 'meow_clicker.notify'):
        self._logger = logging.getLogger(logger_name)

    def alert(self, message: str) -> None:
        self._logger.warning(message)
