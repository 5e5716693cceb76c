"""
状态不变量单元测试
"""

import pytest

from meow_clicker.core.invariant import InvariantError, InvariantType, StateInvariants
from meow_clicker.core.shop import UpgradeCatalog
from meow_clicker.core.state import GameState


@pytest.fixture
def invariants():
    return StateInvariants(UpgradeCatalog())


class TestStateInvariants:
    """测试状态不变量"""

    def test_default_state_valid(self, invariants):
        assert invariants.is_valid(GameState())

    def test_consistent_state_valid(self, invariants):
        state = GameState(meows=10, owned=['m_1.5', 'm_2'], multiplier=3.0,
                          total_earned=610, total_spent=600)
        assert invariants.is_valid(state)

    def test_negative_balance(self, invariants):
        results = invariants.check_all(GameState(meows=-1))
        assert not results[InvariantType.CURRENCY_BALANCE].is_valid

    def test_duplicate_owned(self, invariants):
        results = invariants.check_all(GameState(owned=['m_2', 'm_2'], multiplier=4.0))
        assert not results[InvariantType.OWNED_UPGRADES].is_valid

    def test_unknown_owned(self, invariants):
        results = invariants.check_all(GameState(owned=['m_42']))
        assert not results[InvariantType.OWNED_UPGRADES].is_valid

    def test_multiplier_mismatch(self, invariants):
        results = invariants.check_all(GameState(owned=['m_2'], multiplier=5.0))
        assert not results[InvariantType.MULTIPLIER_CONSISTENCY].is_valid

    def test_totals_must_not_decrease(self, invariants):
        assert invariants.is_valid(GameState(total_earned=10))
        assert not invariants.is_valid(GameState(total_earned=9))

    def test_reset_baseline(self, invariants):
        invariants.is_valid(GameState(total_earned=10))
        invariants.reset_baseline()
        assert invariants.is_valid(GameState())

    def test_raise_on_violation(self, invariants):
        with pytest.raises(InvariantError) as exc_info:
            invariants.check_all(GameState(meows=-5), raise_on_violation=True)
        assert exc_info.value.get_critical_violations()
