"""
Shop Module - 升级商店

Classes:
    Upgrade: 一次性升级
    UpgradeCatalog: 升级目录
    PurchaseOutcome: 购买结果

Functions:
    purchase: 购买升级
    reset_upgrades: 重置升级
"""

from .catalog import Upgrade, UpgradeCatalog, DEFAULT_UPGRADES
from .purchase import PurchaseOutcome, purchase, reset_upgrades

__all__ = [
    'Upgrade',
    'UpgradeCatalog',
    'DEFAULT_UPGRADES',
    'PurchaseOutcome',
    'purchase',
    'reset_upgrades',
]
