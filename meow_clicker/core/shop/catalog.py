"""
升级目录

每个升级只能购买一次，倍率相乘叠加。
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from ..state.types import round6

__all__ = ['Upgrade', 'UpgradeCatalog', 'DEFAULT_UPGRADES']


@dataclass(frozen=True)
class Upgrade:
    """一次性升级"""
    id: str
    title: str
    desc: str
    price: int
    mult: float

    def __post_init__(self):
        if not self.id:
            raise ValueError("升级ID不能为空")
        if self.price < 0:
            raise ValueError("price不能为负数")
        if self.mult < 1.0:
            raise ValueError("mult不能小于1.0")


DEFAULT_UPGRADES = (
    Upgrade('m_1.5', 'Tiny Treat', '1.5× meows', 100, 1.5),
    Upgrade('m_2', 'Fancy Feathers', '2× meows', 500, 2.0),
    Upgrade('m_3', 'Golden Scratcher', '3× meows', 2000, 3.0),
    Upgrade('m_5', 'Cuddle Throne', '5× meows', 10000, 5.0),
)


class UpgradeCatalog:
    """升级目录"""

    def __init__(self, upgrades: Iterable[Upgrade] = DEFAULT_UPGRADES):
        self._upgrades: Dict[str, Upgrade] = {}
        for upgrade in upgrades:
            if upgrade.id in self._upgrades:
                raise ValueError(f"重复的升级ID: {upgrade.id}")
            self._upgrades[upgrade.id] = upgrade

    def get(self, upgrade_id: str) -> Optional[Upgrade]:
        return self._upgrades.get(upgrade_id)

    def __contains__(self, upgrade_id: str) -> bool:
        return upgrade_id in self._upgrades

    def __iter__(self) -> Iterator[Upgrade]:
        return iter(self._upgrades.values())

    def __len__(self) -> int:
        return len(self._upgrades)

    def multiplier_for(self, owned: List[str]) -> float:
        """
        计算已拥有升级的倍率之积

        与购买路径一样，每乘一次都保留6位小数。未知ID按1.0处理。
        """
        multiplier = 1.0
        for upgrade_id in owned:
            upgrade = self._upgrades.get(upgrade_id)
            if upgrade is not None:
                multiplier = round6(multiplier * upgrade.mult)
        return multiplier
