"""
锁定控制器单元测试
"""

from meow_clicker.core.lock import LockController, LockReason, DEFAULT_LOCK_NOTICE


class TestLockController:
    """测试锁定闸门"""

    def test_initially_unlocked(self, lock):
        assert not lock.is_locked
        assert lock.reason is None
        assert lock.locked_at is None
        assert lock.ensure_unlocked() is None

    def test_trip_locks(self, lock):
        assert lock.trip(LockReason.INTEGRITY, "bad data") is True
        assert lock.is_locked
        assert lock.reason == LockReason.INTEGRITY
        assert lock.locked_at is not None
        assert lock.ensure_unlocked() == DEFAULT_LOCK_NOTICE

    def test_second_trip_is_noop(self, lock):
        lock.trip(LockReason.CLICK_RATE)
        assert lock.trip(LockReason.DISPLAY_TAMPER) is False
        assert lock.reason == LockReason.CLICK_RATE

    def test_listeners_fire_once(self, lock):
        calls = []
        lock.on_trip(lambda reason, message: calls.append((reason, message)))
        lock.trip(LockReason.DISPLAY_TAMPER, "edited")
        lock.trip(LockReason.DISPLAY_TAMPER, "edited again")
        assert calls == [(LockReason.DISPLAY_TAMPER, "edited")]

    def test_failing_listener_does_not_block(self, lock):
        calls = []

        def boom(reason, message):
            raise RuntimeError("listener failure")

        lock.on_trip(boom)
        lock.on_trip(lambda reason, message: calls.append(reason))
        assert lock.trip(LockReason.INTEGRITY) is True
        assert calls == [LockReason.INTEGRITY]

    def test_custom_notice(self):
        controller = LockController(notice="locked")
        controller.trip(LockReason.INTEGRITY)
        assert controller.ensure_unlocked() == "locked"
