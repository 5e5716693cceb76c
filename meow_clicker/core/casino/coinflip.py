"""
抛硬币小游戏

公平的50/50抛硬币，与玩家事先的选择比较。下注时立即扣款（计入累计花费），
结果在固定的人为延迟之后揭晓；获胜时返还2倍下注额（净收益等于下注额）。
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Deque, List, Optional
import math
import random

from ..state.types import GameState, round6

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


class CoinSide(Enum):
    """硬币面"""
    HEADS = 'heads'
    TAILS = 'tails'

    @classmethod
    def parse(cls, value: Any) -> 'CoinSide':
        """解析玩家选择，大小写不敏感"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"无效的硬币面: {value!r}") from None


@dataclass(frozen=True)
class CoinflipRules:
    """抛硬币规则"""
    min_bet: int = 5
    max_bet: int = 200000
    resolve_delay_ms: int = 800
    payout_factor: int = 2

    def __post_init__(self):
        if self.min_bet <= 0:
            raise ValueError("min_bet必须为正数")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet不能小于min_bet")
        if self.resolve_delay_ms < 0:
            raise ValueError("resolve_delay_ms不能为负数")


@dataclass(frozen=True)
class PendingBet:
    """已下注、待揭晓的赌注"""
    bet_id: int
    pick: CoinSide
    amount: int
    result: CoinSide

    @property
    def is_win(self) -> bool:
        return self.pick == self.result


@dataclass(frozen=True)
class BetOutcome:
    """揭晓结果"""
    bet: PendingBet
    won: bool
    payout: int


def parse_bet_amount(raw: Any) -> int:
    """
    解析用户输入的下注额，向下取整

    无法解析、空值或非有限数值一律视为0。
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError:
            return 0
    if not math.isfinite(value):
        return 0
    return int(math.floor(value))


def validate_bet(bet: int, balance: float, rules: CoinflipRules) -> Optional[str]:
    """
    校验下注额

    Returns:
        Optional[str]: 拒绝时返回面向用户的消息，通过时返回None
    """
    if bet < rules.min_bet:
        return f"Minimum bet is {rules.min_bet}"
    if bet > rules.max_bet:
        return f"Maximum bet is {rules.max_bet}"
    if bet > balance:
        return f"You don't have {bet} meows to bet."
    return None


class CoinflipGame:
    """抛硬币游戏"""

    def __init__(self, rules: Optional[CoinflipRules] = None, rng: Optional[random.Random] = None):
        self._rules = rules or CoinflipRules()
        self._rng = rng or random.Random()
        self._next_bet_id = 1

    @property
    def rules(self) -> CoinflipRules:
        return self._rules

    def flip(self) -> CoinSide:
        return CoinSide.HEADS if self._rng.random() < 0.5 else CoinSide.TAILS

    def place(self, state: GameState, pick: CoinSide, amount: int) -> PendingBet:
        """
        下注：立即扣款并抛出结果

        调用方必须先通过validate_bet。

        Args:
            state: 游戏状态（原地扣款）
            pick: 玩家选择
            amount: 下注额

        Returns:
            PendingBet: 待揭晓的赌注
        """
        if amount > state.meows:
            raise ValueError(f"下注额{amount}超过余额{state.meows}")
        pending = PendingBet(bet_id=self._next_bet_id, pick=pick, amount=amount, result=self.flip())
        self._next_bet_id += 1
        state.meows = round6(state.meows - amount)
        state.total_spent += amount
        return pending

    def settle(self, state: GameState, pending: PendingBet) -> BetOutcome:
        """揭晓结果，获胜时返还下注额的payout_factor倍"""
        if pending.is_win:
            payout = pending.amount * self._rules.payout_factor
            state.meows = round6(state.meows + payout)
            return BetOutcome(bet=pending, won=True, payout=payout)
        return BetOutcome(bet=pending, won=False, payout=0)


class CasinoLog:
    """赌场消息日志，最新消息在前"""

    def __init__(self, max_entries: int = 50):
        self._entries: Deque[str] = deque(maxlen=max_entries)

    def post(self, message: str) -> None:
        self._entries.appendleft(message)

    def entries(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
