"""
升级购买

购买前先检查余额，保证喵币永不为负；已拥有的升级不会重复扣费。
"""

from enum import Enum, auto

from ..state.types import GameState, round6
from .catalog import UpgradeCatalog

__all__ = ['PurchaseOutcome', 'purchase', 'reset_upgrades']


class PurchaseOutcome(Enum):
    """购买结果"""
    PURCHASED = auto()
    UNKNOWN_ITEM = auto()
    ALREADY_OWNED = auto()
    INSUFFICIENT_FUNDS = auto()


def purchase(state: GameState, catalog: UpgradeCatalog, upgrade_id: str) -> PurchaseOutcome:
    """
    购买升级

    Args:
        state: 游戏状态（成功时原地修改）
        catalog: 升级目录
        upgrade_id: 升级ID

    Returns:
        PurchaseOutcome: 购买结果，非PURCHASED时状态不变
    """
    upgrade = catalog.get(upgrade_id)
    if upgrade is None:
        return PurchaseOutcome.UNKNOWN_ITEM
    if upgrade_id in state.owned:
        return PurchaseOutcome.ALREADY_OWNED
    if state.meows < upgrade.price:
        return PurchaseOutcome.INSUFFICIENT_FUNDS

    state.meows = round6(state.meows - upgrade.price)
    state.total_spent += upgrade.price
    state.owned.append(upgrade.id)
    state.multiplier = round6(state.multiplier * upgrade.mult)
    return PurchaseOutcome.PURCHASED


def reset_upgrades(state: GameState) -> None:
    """清空已拥有升级并把倍率恢复为1.0，累计统计不变"""
    state.owned = []
    state.multiplier = 1.0
