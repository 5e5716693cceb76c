#!/usr/bin/env python3
"""
ConfigService - 配置管理服务

负责集中化管理所有游戏配置，包括：
- 反作弊阈值配置
- 赌场规则配置
- 持久化配置
- 日志配置

为Application层提供统一的配置管理接口。
"""

import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict, fields, replace
from enum import Enum

from .types import QueryResult


class ConfigType(Enum):
    """配置类型枚举"""
    ANTI_CHEAT = "anti_cheat"
    CASINO = "casino"
    PERSISTENCE = "persistence"
    LOGGING = "logging"


@dataclass
class AntiCheatConfig:
    """反作弊配置"""
    click_cooldown_ms: int = 200
    rate_window_ms: int = 2000
    autoclick_detect_rate_per_sec: float = 7.0
    tamper_check_interval_ms: int = 500
    tamper_threshold: int = 3
    integrity_check_interval_ms: int = 2000
    rate_tick_interval_ms: int = 300


@dataclass
class CasinoConfig:
    """赌场配置"""
    min_bet: int = 5
    max_bet: int = 200000
    resolve_delay_ms: int = 800
    bet_step: int = 5  # 键盘上下键调整下注额的步长


@dataclass
class PersistenceConfig:
    """持久化配置"""
    state_key: str = 'sc_state'
    checksum_key: str = 'sc_check'
    secret_key: str = 'sc_secret'
    stats_key: str = 'sc_stats'
    autosave_interval_ms: int = 5000
    time_display_interval_ms: int = 1000
    data_file: str = 'meow_clicker_data.json'


@dataclass
class LoggingConfig:
    """日志配置"""
    log_level: str = 'INFO'
    enable_file_logging: bool = False
    log_file_path: str = 'meow_clicker.log'
    enable_console_logging: bool = True
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


_DEFAULT_FACTORIES = {
    ConfigType.ANTI_CHEAT: AntiCheatConfig,
    ConfigType.CASINO: CasinoConfig,
    ConfigType.PERSISTENCE: PersistenceConfig,
    ConfigType.LOGGING: LoggingConfig,
}


class ConfigService:
    """配置管理服务"""

    def __init__(self):
        """初始化配置服务"""
        self.logger = logging.getLogger(__name__)
        self._configs: Dict[ConfigType, Dict[str, Any]] = {}
        self._load_default_configs()

    def _load_default_configs(self):
        """加载默认配置"""
        self._configs[ConfigType.ANTI_CHEAT] = {
            'default': AntiCheatConfig(),
            # 更短的冷却和窗口：逐秒判定持续的高频点击
            'strict': AntiCheatConfig(
                click_cooldown_ms=100,
                rate_window_ms=1000,
            ),
        }

        self._configs[ConfigType.CASINO] = {
            'default': CasinoConfig(),
        }

        self._configs[ConfigType.PERSISTENCE] = {
            'default': PersistenceConfig(),
        }

        self._configs[ConfigType.LOGGING] = {
            'default': LoggingConfig(),
            'debug': LoggingConfig(
                log_level='DEBUG',
                enable_file_logging=True
            ),
            'production': LoggingConfig(
                log_level='WARNING',
                enable_console_logging=False,
                enable_file_logging=True
            ),
        }

        self.logger.debug("默认配置加载完成")

    def _get_profile(self, config_type: ConfigType, profile: str) -> QueryResult[Any]:
        config_profiles = self._configs.get(config_type, {})
        if profile not in config_profiles:
            self.logger.warning(f"未找到{config_type.value}配置 '{profile}'，使用默认配置")
            profile = 'default'
        config = config_profiles.get(profile)
        # 返回副本，调用方的修改不影响共享的配置文件
        return QueryResult.success_result(replace(config) if config else _DEFAULT_FACTORIES[config_type]())

    def get_anti_cheat_config(self, profile: str = "default") -> QueryResult[AntiCheatConfig]:
        """
        获取反作弊配置

        Args:
            profile: 配置文件名 (default, strict)

        Returns:
            查询结果，包含反作弊配置
        """
        return self._get_profile(ConfigType.ANTI_CHEAT, profile)

    def get_casino_config(self, profile: str = "default") -> QueryResult[CasinoConfig]:
        """获取赌场配置"""
        return self._get_profile(ConfigType.CASINO, profile)

    def get_persistence_config(self, profile: str = "default") -> QueryResult[PersistenceConfig]:
        """获取持久化配置"""
        return self._get_profile(ConfigType.PERSISTENCE, profile)

    def get_logging_config(self, profile: str = "default") -> QueryResult[LoggingConfig]:
        """获取日志配置 (default, debug, production)"""
        return self._get_profile(ConfigType.LOGGING, profile)

    def get_merged_config(self, config_type: ConfigType, profile: str = "default") -> QueryResult[Dict[str, Any]]:
        """获取配置的字典形式"""
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"不支持的配置类型: {config_type}",
                error_code="UNSUPPORTED_CONFIG_TYPE"
            )
        result = self._get_profile(config_type, profile)
        return QueryResult.success_result(asdict(result.data))

    def update_config(self, config_type: ConfigType, profile: str, updates: Dict[str, Any]) -> QueryResult[bool]:
        """
        更新配置

        Args:
            config_type: 配置类型
            profile: 配置文件名
            updates: 更新的配置项

        Returns:
            查询结果，包含更新是否成功
        """
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )

        config_profiles = self._configs[config_type]
        if profile not in config_profiles:
            return QueryResult.failure_result(
                f"配置文件 {profile} 不存在",
                error_code="CONFIG_PROFILE_NOT_FOUND"
            )

        current_config = config_profiles[profile]
        known = {f.name for f in fields(current_config)}
        for key in updates:
            if key not in known:
                self.logger.warning(f"配置项 {key} 不存在于 {config_type.value}.{profile} 中")
        # 整体替换，已经取出的配置副本保持不变
        config_profiles[profile] = replace(
            current_config, **{k: v for k, v in updates.items() if k in known}
        )

        self.logger.info(f"配置 {config_type.value}.{profile} 更新成功")
        return QueryResult.success_result(True)

    def list_available_profiles(self, config_type: ConfigType) -> QueryResult[List[str]]:
        """列出可用的配置文件"""
        if config_type not in self._configs:
            return QueryResult.failure_result(
                f"配置类型 {config_type} 不存在",
                error_code="CONFIG_TYPE_NOT_FOUND"
            )
        return QueryResult.success_result(list(self._configs[config_type].keys()))


def configure_logging(config: LoggingConfig) -> None:
    """
    按LoggingConfig配置根日志记录器

    重复调用时会替换之前由本函数安装的处理器。
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if getattr(handler, '_meow_clicker_handler', False):
            root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.log_format)
    handlers: List[logging.Handler] = []
    if config.enable_console_logging:
        handlers.append(logging.StreamHandler())
    if config.enable_file_logging:
        handlers.append(logging.FileHandler(config.log_file_path, encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._meow_clicker_handler = True
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))


# 全局单例
_config_service_instance: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """
    获取配置服务的全局单例

    Returns:
        ConfigService: 配置服务实例
    """
    global _config_service_instance
    if _config_service_instance is None:
        _config_service_instance = ConfigService()
    return _config_service_instance
