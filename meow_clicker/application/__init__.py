"""
Application Layer - 应用服务层

包含命令服务和查询服务，以及组装所有组件的顶层运行时。
应用层可以访问核心层，但不能被核心层访问。

Services:
    ClickerCommandService: 游戏命令服务（唯一认可的写入路径）
    ClickerQueryService: 游戏查询服务（只读操作）
    ConfigService: 配置管理服务
    ValidationService: 验证服务

Runtime:
    ClickerRuntime: 顶层控制器
"""

from .types import (
    ResultStatus,
    CommandResult,
    QueryResult,
)
from .config_service import (
    ConfigService,
    ConfigType,
    AntiCheatConfig,
    CasinoConfig,
    PersistenceConfig,
    LoggingConfig,
    configure_logging,
    get_config_service,
)
from .validation_service import ValidationService, ValidationResult, BetValidation
from .notifier import Notifier, CollectingNotifier, LoggingNotifier
from .display_presenter import DisplayPresenter
from .command_service import ClickerCommandService, ClickerSession
from .query_service import ClickerQueryService, StateView, ShopItemView, LockStatus
from .runtime import ClickerRuntime

__version__ = "1.0.0"

__all__ = [
    # 类型
    "ResultStatus",
    "CommandResult",
    "QueryResult",

    # 配置
    "ConfigService",
    "ConfigType",
    "AntiCheatConfig",
    "CasinoConfig",
    "PersistenceConfig",
    "LoggingConfig",
    "configure_logging",
    "get_config_service",

    # 服务
    "ValidationService",
    "ValidationResult",
    "BetValidation",
    "ClickerCommandService",
    "ClickerQueryService",
    "DisplayPresenter",

    # 通知
    "Notifier",
    "CollectingNotifier",
    "LoggingNotifier",

    # 数据类
    "ClickerSession",
    "StateView",
    "ShopItemView",
    "LockStatus",

    # 运行时
    "ClickerRuntime",
]
