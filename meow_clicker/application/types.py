"""
Application Layer Types - 应用层类型定义

命令与查询都返回结果对象，不向UI抛出异常。
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar('T')


class ResultStatus(Enum):
    """操作结果状态"""
    SUCCESS = auto()
    FAILURE = auto()
    VALIDATION_ERROR = auto()          # 输入不合法（下注额、余额不足等）
    BUSINESS_RULE_VIOLATION = auto()   # 状态不允许此操作
    LOCKED = auto()                    # 会话已锁定


@dataclass(frozen=True)
class CommandResult:
    """
    命令执行结果

    Attributes:
        success: 是否执行成功
        status: 结果状态
        message: 面向用户的消息
        error_code: 机器可读的错误码
        data: 附加数据
    """
    success: bool
    status: ResultStatus
    message: str = ""
    error_code: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, message: str = "操作成功", data: Optional[Dict[str, Any]] = None) -> 'CommandResult':
        return cls(True, ResultStatus.SUCCESS, message, data=data)

    @classmethod
    def failure_result(cls, message: str, error_code: Optional[str] = None,
                       status: ResultStatus = ResultStatus.FAILURE) -> 'CommandResult':
        return cls(False, status, message, error_code)

    @classmethod
    def validation_error(cls, message: str, error_code: Optional[str] = None) -> 'CommandResult':
        return cls.failure_result(message, error_code, ResultStatus.VALIDATION_ERROR)

    @classmethod
    def business_rule_violation(cls, message: str, error_code: Optional[str] = None) -> 'CommandResult':
        return cls.failure_result(message, error_code, ResultStatus.BUSINESS_RULE_VIOLATION)

    @classmethod
    def locked(cls, message: str) -> 'CommandResult':
        """会话已锁定，message为锁定提示"""
        return cls.failure_result(message, "SESSION_LOCKED", ResultStatus.LOCKED)


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """查询结果"""
    success: bool
    status: ResultStatus
    data: Optional[T] = None
    message: str = ""
    error_code: Optional[str] = None

    @classmethod
    def success_result(cls, data: T, message: str = "") -> 'QueryResult[T]':
        return cls(True, ResultStatus.SUCCESS, data, message)

    @classmethod
    def failure_result(cls, message: str, error_code: Optional[str] = None) -> 'QueryResult[T]':
        return cls(False, ResultStatus.FAILURE, None, message, error_code)
