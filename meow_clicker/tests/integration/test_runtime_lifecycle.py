"""
运行时集成测试

覆盖启动流程、跨重载的持久化、周期性完整性校验、显示篡改锁定与统计导出。
"""

import json

import pytest

from meow_clicker.application import ClickerRuntime, ResultStatus
from meow_clicker.application.runtime import INTEGRITY_LOCK_NOTICE, LOAD_RESET_NOTICE
from meow_clicker.core.checksum import ChecksumEngine, SessionSecret
from meow_clicker.core.display import DisplayElements, TAMPER_LOCK_NOTICE
from meow_clicker.core.events import EventType
from meow_clicker.core.lock import LockReason
from meow_clicker.core.state import GameState
from meow_clicker.core.storage import JsonFileKeyValueStore, MappingKeyValueStore, MemoryKeyValueStore


def _click_times(runtime, count, spacing_ms=250):
    for _ in range(count):
        runtime.commands.click()
        runtime.scheduler.advance(spacing_ms)


@pytest.mark.integration
class TestBoot:
    """测试启动流程"""

    def test_fresh_boot(self, make_runtime, surface, notifier):
        runtime = make_runtime()
        result = runtime.boot()
        assert result.success
        assert result.data == {'reset': False}
        assert runtime.state == GameState.default()
        assert surface.read(DisplayElements.MEOWS) == '0'
        assert surface.read(DisplayElements.OWNED_LIST) == 'None yet'
        assert notifier.messages == []

    def test_boot_twice(self, runtime):
        assert runtime.boot().error_code == "ALREADY_BOOTED"

    def test_reload_in_same_session_preserves_state(self, runtime, make_runtime):
        _click_times(runtime, 3)
        reloaded = make_runtime()
        result = reloaded.boot()
        assert result.data == {'reset': False}
        assert reloaded.state.meows == 3
        assert reloaded.state.total_earned == 3

    def test_new_session_resets_progress(self, runtime, make_runtime, notifier, durable_store):
        _click_times(runtime, 3)
        reloaded = make_runtime(session_store=MemoryKeyValueStore())
        result = reloaded.boot()
        assert result.data == {'reset': True}
        assert reloaded.state == GameState.default()
        assert LOAD_RESET_NOTICE in notifier.messages
        assert json.loads(durable_store.get('sc_state'))['meows'] == 0
        assert reloaded.session.store.verify()
        assert not reloaded.session.lock.is_locked
        assert reloaded.event_bus.get_event_history(event_type=EventType.STATE_RESET)

    def test_page_refresh_keeps_secret_from_url(self, make_runtime, notifier):
        """刷新页面会新建会话存储，但URL参数里的密钥保留，进度不被重置"""
        url_params = {}
        first = make_runtime(session_store=MappingKeyValueStore(url_params))
        first.boot()
        _click_times(first, 3)
        secret = url_params['sc_secret']

        refreshed = make_runtime(session_store=MappingKeyValueStore(dict(url_params)))
        assert refreshed.boot().data == {'reset': False}
        assert refreshed.session.store.checksum_engine.secret.value == secret
        assert refreshed.state.meows == 3
        assert LOAD_RESET_NOTICE not in notifier.messages

    def test_edited_blob_is_reset_on_load(self, runtime, make_runtime, durable_store, notifier):
        _click_times(runtime, 2)
        data = json.loads(durable_store.get('sc_state'))
        data['meows'] = 1_000_000
        durable_store.set('sc_state', json.dumps(data))
        reloaded = make_runtime()
        assert reloaded.boot().data == {'reset': True}
        assert reloaded.state.meows == 0
        assert LOAD_RESET_NOTICE in notifier.messages

    def test_malformed_blob_loads_defaults_without_reset(self, make_runtime, durable_store, notifier):
        durable_store.set('sc_state', '{not json')
        runtime = make_runtime()
        assert runtime.boot().data == {'reset': False}
        assert runtime.state == GameState.default()
        assert LOAD_RESET_NOTICE not in notifier.messages

    def test_partial_blob_merges_defaults(self, make_runtime, durable_store, session_store):
        runtime = make_runtime()
        engine = ChecksumEngine(SessionSecret(session_store.get('sc_secret')))
        durable_store.set('sc_state', '{"meows":12}')
        durable_store.set('sc_check', engine.digest_text('{"meows":12}'))
        assert runtime.boot().data == {'reset': False}
        assert runtime.state.meows == 12
        assert runtime.state.multiplier == 1.0
        assert runtime.state.owned == []


@pytest.mark.integration
@pytest.mark.anti_cheat
class TestPeriodicChecks:
    """测试周期任务"""

    def test_periodic_integrity_failure_locks(self, runtime, durable_store, notifier):
        _click_times(runtime, 2)
        data = json.loads(durable_store.get('sc_state'))
        data['meows'] = 999
        durable_store.set('sc_state', json.dumps(data))
        runtime.scheduler.advance(2000)

        lock = runtime.session.lock
        assert lock.is_locked
        assert lock.reason == LockReason.INTEGRITY
        assert INTEGRITY_LOCK_NOTICE in notifier.messages
        assert runtime.commands.click().status == ResultStatus.LOCKED
        assert runtime.event_bus.get_event_history(event_type=EventType.INTEGRITY_FAILED)

    def test_locked_integrity_check_stops_saving(self, runtime, durable_store):
        durable_store.set('sc_state', json.dumps(GameState(meows=50).to_dict()))
        runtime.scheduler.advance(2000)
        assert runtime.session.lock.is_locked
        assert json.loads(durable_store.get('sc_state'))['meows'] == 50

    def test_autosave_keeps_store_verifiable(self, runtime, durable_store):
        _click_times(runtime, 4)
        runtime.scheduler.advance(5000)
        assert runtime.session.store.verify()
        assert runtime.event_bus.get_event_history(event_type=EventType.STATE_SAVED)

    def test_single_display_edit_heals(self, runtime, surface):
        surface.render(DisplayElements.MEOWS, '1000000')
        runtime.scheduler.advance(500)
        assert surface.read(DisplayElements.MEOWS) == '0'
        assert runtime.queries.get_lock_status().data.tamper_count == 1
        assert not runtime.session.lock.is_locked

    def test_fourth_display_edit_locks(self, runtime, surface, notifier):
        for _ in range(4):
            surface.render(DisplayElements.MEOWS, '1000000')
            runtime.scheduler.advance(500)

        lock = runtime.session.lock
        assert lock.is_locked
        assert lock.reason == LockReason.DISPLAY_TAMPER
        assert TAMPER_LOCK_NOTICE in notifier.messages
        assert runtime.event_bus.get_event_history(event_type=EventType.SESSION_LOCKED)

    def test_rate_display_decays(self, runtime, surface):
        _click_times(runtime, 3, spacing_ms=300)
        assert surface.read(DisplayElements.CLICKS_PER_SEC) != '0.0'
        runtime.scheduler.advance(3000)
        assert surface.read(DisplayElements.CLICKS_PER_SEC) == '0.0'

    def test_lock_is_cleared_only_by_reload(self, runtime, make_runtime):
        runtime.session.lock.trip(LockReason.DISPLAY_TAMPER, "tampered")
        reloaded = make_runtime()
        reloaded.boot()
        assert not reloaded.session.lock.is_locked
        assert reloaded.commands.click().success


@pytest.mark.integration
class TestExportAndFileStore:
    """测试统计导出与文件存储"""

    def test_export_stats(self, runtime, tmp_path):
        _click_times(runtime, 2)
        path = tmp_path / 'shelby_cleo_stats.json'
        text = runtime.export_stats(str(path))
        assert json.loads(text) == json.loads(path.read_text(encoding='utf-8'))
        assert json.loads(text)['totalEarned'] == 2

    def test_export_does_not_require_unlocked(self, runtime):
        runtime.session.lock.trip(LockReason.INTEGRITY)
        assert json.loads(runtime.export_stats())['meows'] == 0

    @pytest.mark.anti_cheat
    def test_on_disk_edit_locks_running_session(self, tmp_path, session_store, manual_clock, config_service, notifier):
        """运行期间直接修改数据文件，下一次完整性校验锁定会话且不覆盖文件"""
        data_file = tmp_path / 'meow_clicker_data.json'
        runtime = ClickerRuntime.from_data_file(
            str(data_file), session_store=session_store, clock=manual_clock,
            config_service=config_service, notifier=notifier,
        )
        runtime.boot()
        runtime.commands.click()

        namespace = json.loads(data_file.read_text(encoding='utf-8'))
        state = json.loads(namespace['sc_state'])
        state['meows'] = 999999
        namespace['sc_state'] = json.dumps(state)
        data_file.write_text(json.dumps(namespace), encoding='utf-8')

        runtime.scheduler.advance(2000)

        assert runtime.session.lock.reason == LockReason.INTEGRITY
        assert INTEGRITY_LOCK_NOTICE in notifier.messages
        on_disk = json.loads(json.loads(data_file.read_text(encoding='utf-8'))['sc_state'])
        assert on_disk['meows'] == 999999

    def test_file_backed_reload(self, tmp_path, session_store, manual_clock, config_service):
        data_file = str(tmp_path / 'meow_clicker_data.json')
        first = ClickerRuntime.from_data_file(
            data_file, session_store=session_store, clock=manual_clock, config_service=config_service
        )
        first.boot()
        first.commands.click()
        first.shutdown()

        second = ClickerRuntime(
            JsonFileKeyValueStore(data_file), session_store=session_store,
            clock=manual_clock, config_service=config_service
        )
        assert second.boot().data == {'reset': False}
        assert second.state.meows == 1
