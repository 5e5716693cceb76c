"""
抛硬币小游戏单元测试
"""

import pytest

from meow_clicker.core.casino import (
    CasinoLog,
    CoinflipGame,
    CoinflipRules,
    CoinSide,
    parse_bet_amount,
    validate_bet,
)
from meow_clicker.core.state import GameState
from meow_clicker.tests.helpers import FixedRandom, HEADS_RNG_VALUE, TAILS_RNG_VALUE


class TestCoinSide:

    def test_parse(self):
        assert CoinSide.parse('heads') == CoinSide.HEADS
        assert CoinSide.parse(' TAILS ') == CoinSide.TAILS
        assert CoinSide.parse(CoinSide.HEADS) == CoinSide.HEADS

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            CoinSide.parse('edge')


class TestBetParsing:
    """测试下注额解析与校验"""

    @pytest.mark.parametrize("raw, expected", [
        (5, 5),
        (7.9, 7),
        ('12', 12),
        (' 12.7 ', 12),
        ('', 0),
        ('abc', 0),
        (None, 0),
        (True, 0),
        (float('inf'), 0),
        ('nan', 0),
    ])
    def test_parse_bet_amount(self, raw, expected):
        assert parse_bet_amount(raw) == expected

    def test_validate_bet_order(self):
        rules = CoinflipRules()
        assert validate_bet(4, 100, rules) == "Minimum bet is 5"
        assert validate_bet(200001, 10 ** 9, rules) == "Maximum bet is 200000"
        assert validate_bet(50, 49.5, rules) == "You don't have 50 meows to bet."
        assert validate_bet(5, 5, rules) is None

    def test_minimum_checked_before_balance(self):
        assert validate_bet(1, 0, CoinflipRules()) == "Minimum bet is 5"

    def test_invalid_rules(self):
        with pytest.raises(ValueError):
            CoinflipRules(min_bet=0)
        with pytest.raises(ValueError):
            CoinflipRules(min_bet=10, max_bet=5)


class TestCoinflipGame:
    """测试下注与揭晓"""

    def test_place_debits_immediately(self):
        game = CoinflipGame(rng=FixedRandom(HEADS_RNG_VALUE))
        state = GameState(meows=100, total_spent=10)
        pending = game.place(state, CoinSide.HEADS, 40)
        assert state.meows == 60
        assert state.total_spent == 50
        assert pending.amount == 40
        assert pending.result == CoinSide.HEADS
        assert pending.is_win

    def test_win_pays_double(self):
        game = CoinflipGame(rng=FixedRandom(HEADS_RNG_VALUE))
        state = GameState(meows=100)
        pending = game.place(state, CoinSide.HEADS, 40)
        outcome = game.settle(state, pending)
        assert outcome.won
        assert outcome.payout == 80
        assert state.meows == 140
        assert state.total_earned == 0

    def test_loss_keeps_debit(self):
        game = CoinflipGame(rng=FixedRandom(TAILS_RNG_VALUE))
        state = GameState(meows=100)
        pending = game.place(state, CoinSide.HEADS, 40)
        outcome = game.settle(state, pending)
        assert not outcome.won
        assert outcome.payout == 0
        assert state.meows == 60

    def test_bet_ids_increase(self):
        game = CoinflipGame(rng=FixedRandom(HEADS_RNG_VALUE))
        state = GameState(meows=100)
        first = game.place(state, CoinSide.TAILS, 5)
        second = game.place(state, CoinSide.TAILS, 5)
        assert second.bet_id == first.bet_id + 1

    def test_overdraw_rejected(self):
        game = CoinflipGame()
        with pytest.raises(ValueError):
            game.place(GameState(meows=4), CoinSide.HEADS, 5)


class TestCasinoLog:

    def test_newest_first_and_bounded(self):
        log = CasinoLog(max_entries=3)
        for i in range(5):
            log.post(f"message {i}")
        assert log.entries() == ["message 4", "message 3", "message 2"]
        assert len(log) == 3
