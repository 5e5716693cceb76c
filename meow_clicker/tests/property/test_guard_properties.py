"""
Property-based Tests for Click Rate Guard - 点击频率防护属性测试

Tests:
    test_admitted_clicks_respect_cooldown: 准入点击之间的间隔不小于冷却时间
    test_human_pace_never_locks: 人类节奏的点击永不触发锁定
    test_balance_never_negative: 任意命令序列下余额非负、校验通过
"""

import pytest
from hypothesis import given, settings, strategies as st

from meow_clicker.application import ClickerRuntime, CollectingNotifier, ConfigService
from meow_clicker.core.display import InMemoryDisplaySurface
from meow_clicker.core.guard import ClickDecision, ClickRateGuard
from meow_clicker.core.lock import LockController
from meow_clicker.core.scheduler import ManualClock
from meow_clicker.core.storage import MemoryKeyValueStore
from meow_clicker.tests.helpers import FixedRandom, HEADS_RNG_VALUE, TAILS_RNG_VALUE


gaps_strategy = st.lists(st.integers(min_value=0, max_value=1000), min_size=1, max_size=200)


@pytest.mark.property_test
@pytest.mark.anti_cheat
@given(gaps_strategy)
def test_admitted_clicks_respect_cooldown(gaps):
    """Property test: 无论点击多快，被准入的点击间隔都不小于冷却时间"""
    guard = ClickRateGuard(LockController(), cooldown_ms=200)
    now = 0
    admitted = []
    for gap in gaps:
        now += gap
        if guard.register(now) == ClickDecision.ADMITTED:
            admitted.append(now)

    assert all(b - a >= 200 for a, b in zip(admitted, admitted[1:]))


@pytest.mark.property_test
@pytest.mark.anti_cheat
@given(st.lists(st.integers(min_value=250, max_value=5000), min_size=1, max_size=200))
def test_human_pace_never_locks(gaps):
    """Property test: 每次间隔至少250ms的点击永不触发锁定"""
    lock = LockController()
    guard = ClickRateGuard(lock)
    now = 0
    for gap in gaps:
        now += gap
        assert guard.register(now) == ClickDecision.ADMITTED

    assert not lock.is_locked


command_strategy = st.lists(
    st.one_of(
        st.tuples(st.just('click'), st.integers(min_value=0, max_value=400)),
        st.tuples(st.just('buy'), st.sampled_from(['m_1.5', 'm_2', 'm_3', 'm_5', 'bogus'])),
        st.tuples(st.just('bet'), st.integers(min_value=-10, max_value=300)),
        st.tuples(st.just('reset'), st.just(0)),
        st.tuples(st.just('wait'), st.integers(min_value=0, max_value=3000)),
    ),
    max_size=60,
)


@pytest.mark.property_test
@settings(max_examples=50, deadline=None)
@given(command_strategy, st.sampled_from([HEADS_RNG_VALUE, TAILS_RNG_VALUE]), st.integers(min_value=0, max_value=500))
def test_balance_never_negative(commands, rng_value, starting_meows):
    """Property test: 任意命令序列下余额非负，累计统计不减少，持久化数据始终可校验"""
    runtime = ClickerRuntime(
        MemoryKeyValueStore(),
        session_store=MemoryKeyValueStore(),
        surface=InMemoryDisplaySurface(),
        notifier=CollectingNotifier(),
        clock=ManualClock(),
        config_service=ConfigService(),
        rng=FixedRandom(rng_value),
    )
    runtime.boot()
    runtime.state.meows = starting_meows
    runtime.session.store.save(runtime.state)
    runtime.update_displays()

    earned, spent = runtime.state.total_earned, runtime.state.total_spent
    for name, arg in commands:
        if name == 'click':
            runtime.scheduler.advance(arg)
            runtime.commands.click()
        elif name == 'buy':
            runtime.commands.buy_upgrade(arg)
        elif name == 'bet':
            runtime.commands.place_bet('heads', arg)
        elif name == 'reset':
            runtime.commands.reset_upgrades()
        else:
            runtime.scheduler.advance(arg)

        state = runtime.state
        assert state.meows >= 0
        assert state.total_earned >= earned
        assert state.total_spent >= spent
        earned, spent = state.total_earned, state.total_spent

    runtime.scheduler.advance(1000)
    assert runtime.session.store.verify()
    assert not runtime.session.lock.is_locked
