"""
Casino Module - 抛硬币小游戏

Classes:
    CoinflipGame: 抛硬币游戏
    CoinflipRules: 规则
    CasinoLog: 赌场消息日志
"""

from .coinflip import (
    CoinSide,
    CoinflipRules,
    PendingBet,
    BetOutcome,
    CoinflipGame,
    CasinoLog,
    parse_bet_amount,
    validate_bet,
)

__all__ = [
    'CoinSide',
    'CoinflipRules',
    'PendingBet',
    'BetOutcome',
    'CoinflipGame',
    'CasinoLog',
    'parse_bet_amount',
    'validate_bet',
]
