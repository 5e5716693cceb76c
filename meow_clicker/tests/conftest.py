"""
Test Configuration - pytest配置文件

该文件提供测试的基础设施，包括：
- 手动时钟和内存存储
- 已启动的运行时
- 测试标记

所有测试都会自动加载这些配置。
"""

import pytest

from meow_clicker.application import ClickerRuntime, CollectingNotifier, ConfigService
from meow_clicker.core.checksum import ChecksumEngine, SessionSecret
from meow_clicker.core.display import InMemoryDisplaySurface
from meow_clicker.core.lock import LockController
from meow_clicker.core.scheduler import ManualClock
from meow_clicker.core.storage import MemoryKeyValueStore, PersistentStateStore
from meow_clicker.tests.helpers import FixedRandom, HEADS_RNG_VALUE


@pytest.fixture
def manual_clock():
    return ManualClock(start_ms=0)


@pytest.fixture
def durable_store():
    """跨会话的持久存储"""
    return MemoryKeyValueStore()


@pytest.fixture
def session_store():
    """会话级存储"""
    return MemoryKeyValueStore()


@pytest.fixture
def lock():
    return LockController()


@pytest.fixture
def surface():
    return InMemoryDisplaySurface()


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def config_service():
    """每个测试独立的配置服务，避免修改全局单例"""
    return ConfigService()


@pytest.fixture
def checksum_engine():
    return ChecksumEngine(SessionSecret("1-2-3-4"))


@pytest.fixture
def state_store(durable_store, checksum_engine):
    return PersistentStateStore(durable_store, checksum_engine)


@pytest.fixture
def make_runtime(durable_store, session_store, surface, notifier, manual_clock, config_service):
    """创建运行时的工厂，默认共享同一组存储和时钟"""
    def _make(profile: str = "default", rng=None, **overrides) -> ClickerRuntime:
        kwargs = dict(
            durable_store=durable_store,
            session_store=session_store,
            surface=surface,
            notifier=notifier,
            clock=manual_clock,
            config_service=config_service,
            anti_cheat_profile=profile,
            rng=rng or FixedRandom(HEADS_RNG_VALUE),
        )
        kwargs.update(overrides)
        return ClickerRuntime(**kwargs)
    return _make


@pytest.fixture
def runtime(make_runtime):
    """已启动的运行时"""
    rt = make_runtime()
    rt.boot()
    return rt


def pytest_configure(config):
    """pytest配置"""
    config.addinivalue_line(
        "markers", "anti_cheat: 标记反作弊相关测试"
    )
    config.addinivalue_line(
        "markers", "property_test: 标记基于属性的测试"
    )
    config.addinivalue_line(
        "markers", "integration: 标记集成测试"
    )
