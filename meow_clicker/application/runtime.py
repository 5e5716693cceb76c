"""
Clicker Runtime - 顶层控制器

持有唯一的游戏会话，负责启动流程和所有周期任务：
- 完整性校验 + 保存（默认2000ms）：校验失败立即锁定会话，不再保存
- 显示篡改检查（默认500ms）
- 自动保存（默认5000ms）
- 点击频率窗口平滑（默认300ms）
- 活跃时长显示（默认1000ms）

启动时的完整性失败会重置数据，运行中的完整性失败则锁定会话。
启动时的不一致可能来自合法的版本变更，因此处理得更宽松。
"""

from typing import Optional
import logging
import random
import uuid

from .types import CommandResult
from .notifier import Notifier, LoggingNotifier
from .display_presenter import DisplayPresenter
from .config_service import ConfigService, get_config_service
from .validation_service import ValidationService
from .command_service import ClickerSession, ClickerCommandService
from .query_service import ClickerQueryService
from ..core.casino import CasinoLog, CoinflipGame
from ..core.checksum import ChecksumEngine, SessionSecret
from ..core.display import DisplaySurface, DisplayTamperMonitor, InMemoryDisplaySurface
from ..core.events import DomainEvent, EventBus, EventType
from ..core.guard import ClickRateGuard
from ..core.lock import LockController, LockReason
from ..core.scheduler import Clock, CooperativeScheduler, SystemClock
from ..core.shop import UpgradeCatalog
from ..core.state import GameState, StateSerializer
from ..core.storage import (
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    PersistentStateStore,
    StorageKeys,
)

__all__ = ['ClickerRuntime', 'LOAD_RESET_NOTICE', 'INTEGRITY_LOCK_NOTICE']

logger = logging.getLogger(__name__)

LOAD_RESET_NOTICE = 'Data integrity check failed on load. Resetting local data for safety.'
INTEGRITY_LOCK_NOTICE = 'Data integrity check failed. Possible tampering detected — account locked.'


class ClickerRuntime:
    """顶层控制器"""

    def __init__(self,
                 durable_store: KeyValueStore,
                 session_store: Optional[KeyValueStore] = None,
                 surface: Optional[DisplaySurface] = None,
                 notifier: Optional[Notifier] = None,
                 clock: Optional[Clock] = None,
                 config_service: Optional[ConfigService] = None,
                 anti_cheat_profile: str = "default",
                 rng: Optional[random.Random] = None,
                 catalog: Optional[UpgradeCatalog] = None):
        """
        初始化运行时

        Args:
            durable_store: 持久键值存储（跨会话）
            session_store: 会话级键值存储，保存会话密钥
            surface: 渲染表面
            notifier: 用户提示
            clock: 时钟
            config_service: 配置服务
            anti_cheat_profile: 反作弊配置文件名
            rng: 抛硬币随机源
            catalog: 升级目录
        """
        self._config_service = config_service or get_config_service()
        self._anti_cheat = self._config_service.get_anti_cheat_config(anti_cheat_profile).data
        self._casino = self._config_service.get_casino_config().data
        self._persistence = self._config_service.get_persistence_config().data

        self._session_store = session_store if session_store is not None else MemoryKeyValueStore()
        keys = StorageKeys(
            state=self._persistence.state_key,
            checksum=self._persistence.checksum_key,
            secret=self._persistence.secret_key,
            stats=self._persistence.stats_key,
        )
        secret = SessionSecret.load_or_create(self._session_store, keys.secret)
        store = PersistentStateStore(durable_store, ChecksumEngine(secret), keys)

        catalog = catalog or UpgradeCatalog()
        surface = surface if surface is not None else InMemoryDisplaySurface()
        lock = LockController()
        self._validation = ValidationService(catalog, self._casino)

        self._session = ClickerSession(
            session_id=f"session_{uuid.uuid4().hex[:8]}",
            state=GameState.default(),
            lock=lock,
            guard=ClickRateGuard(
                lock,
                cooldown_ms=self._anti_cheat.click_cooldown_ms,
                window_ms=self._anti_cheat.rate_window_ms,
                max_rate=self._anti_cheat.autoclick_detect_rate_per_sec,
            ),
            tamper_monitor=DisplayTamperMonitor(lock, surface, threshold=self._anti_cheat.tamper_threshold),
            store=store,
            scheduler=CooperativeScheduler(clock or SystemClock()),
            event_bus=EventBus(),
            notifier=notifier or LoggingNotifier(),
            presenter=DisplayPresenter(surface, catalog),
            catalog=catalog,
            coinflip=CoinflipGame(self._validation.coinflip_rules, rng),
            casino_log=CasinoLog(),
        )
        lock.on_trip(self._on_lock_tripped)

        self.commands = ClickerCommandService(self._session, self._validation)
        self.queries = ClickerQueryService(self._session)
        self._booted = False

    @classmethod
    def from_data_file(cls, data_file: Optional[str] = None, **kwargs) -> 'ClickerRuntime':
        """使用JSON文件作为持久存储创建运行时"""
        config_service = kwargs.get('config_service') or get_config_service()
        kwargs['config_service'] = config_service
        path = data_file or config_service.get_persistence_config().data.data_file
        return cls(JsonFileKeyValueStore(path), **kwargs)

    @property
    def session(self) -> ClickerSession:
        return self._session

    @property
    def state(self) -> GameState:
        return self._session.state

    @property
    def scheduler(self) -> CooperativeScheduler:
        return self._session.scheduler

    @property
    def event_bus(self) -> EventBus:
        return self._session.event_bus

    def _publish(self, event_type: EventType, data: dict) -> None:
        self._session.event_bus.publish(DomainEvent.create(event_type, self._session.session_id, data))

    def _on_lock_tripped(self, reason: LockReason, message: str) -> None:
        self._session.notifier.alert(message or self._session.lock.ensure_unlocked())
        self._publish(EventType.SESSION_LOCKED, {'reason': reason.name})

    def boot(self) -> CommandResult:
        """
        启动：校验持久化数据，加载状态，渲染显示，登记周期任务

        Returns:
            命令执行结果，data['reset']表示是否因校验失败重置了数据
        """
        if self._booted:
            return CommandResult.business_rule_violation("运行时已启动", error_code="ALREADY_BOOTED")

        session = self._session
        reset = False
        if not session.store.verify():
            logger.warning("启动时完整性校验失败，重置本地数据")
            session.notifier.alert(LOAD_RESET_NOTICE)
            session.store.clear()
            session.state = GameState.default()
            session.store.save(session.state)
            self._publish(EventType.STATE_RESET, {'phase': 'load'})
            reset = True
        else:
            loaded = session.store.load()
            if loaded is not None:
                session.state = loaded
                validation = self._validation.validate_state(loaded).data
                if not validation.is_valid:
                    logger.warning(f"加载的状态违反不变量: {[e.message for e in validation.errors]}")

        session.presenter.refresh(session.state)
        session.presenter.render_rate(0.0)
        session.presenter.render_time(session.state.active_time_seconds)
        self._register_periodic_tasks()
        self._booted = True
        logger.info(f"会话 {session.session_id} 已启动，余额 {session.state.meows}")
        return CommandResult.success_result("启动完成", data={'reset': reset})

    def _register_periodic_tasks(self) -> None:
        scheduler = self._session.scheduler
        scheduler.call_every(self._anti_cheat.integrity_check_interval_ms, self.integrity_check, "integrity_check")
        scheduler.call_every(self._anti_cheat.tamper_check_interval_ms, self.tamper_check, "tamper_check")
        scheduler.call_every(self._persistence.autosave_interval_ms, self.autosave, "autosave")
        scheduler.call_every(self._anti_cheat.rate_tick_interval_ms, self.rate_tick, "rate_tick")
        scheduler.call_every(self._persistence.time_display_interval_ms, self.time_tick, "time_display")

    def integrity_check(self) -> bool:
        """周期性完整性校验；通过后保存当前状态"""
        session = self._session
        if not session.store.verify():
            self._publish(EventType.INTEGRITY_FAILED, {'phase': 'periodic'})
            session.lock.trip(LockReason.INTEGRITY, INTEGRITY_LOCK_NOTICE)
            return False
        session.store.save(session.state)
        return True

    def tamper_check(self) -> bool:
        session = self._session
        consistent = session.tamper_monitor.check(session.state)
        if not consistent:
            self._publish(EventType.DISPLAY_TAMPERED, {'count': session.tamper_monitor.tamper_count})
        return consistent

    def autosave(self) -> None:
        self._session.store.save(self._session.state)
        self._publish(EventType.STATE_SAVED, {'phase': 'autosave'})

    def rate_tick(self) -> float:
        rate = self._session.guard.tick(self._session.now_ms())
        self._session.presenter.render_rate(rate)
        return rate

    def time_tick(self) -> None:
        self._session.presenter.render_time(self.queries.get_time_played())

    def update_displays(self) -> None:
        self._session.presenter.refresh(self._session.state)

    def pump(self) -> int:
        """执行所有已到期的定时任务"""
        return self._session.scheduler.run_due()

    def export_stats(self, file_path: Optional[str] = None) -> str:
        """
        导出统计数据

        Args:
            file_path: 可选，写入的文件路径

        Returns:
            str: 导出的JSON文本
        """
        if file_path:
            StateSerializer.write_stats_file(self._session.state, file_path)
        return StateSerializer.export_stats_json(self._session.state)

    def shutdown(self) -> None:
        self.commands.stop_active_timer()
        self._session.scheduler.shutdown()
