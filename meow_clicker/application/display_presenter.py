"""
显示呈现器

以规范状态为唯一真实来源，把格式化文本推送到渲染表面。
"""

from ..core.display import (
    DisplayElements,
    DisplaySurface,
    format_amount,
    format_duration,
    format_multiplier,
    format_rate,
)
from ..core.shop import UpgradeCatalog
from ..core.state import GameState

__all__ = ['DisplayPresenter', 'NO_UPGRADES_TEXT']

NO_UPGRADES_TEXT = 'None yet'


class DisplayPresenter:
    """显示呈现器"""

    def __init__(self, surface: DisplaySurface, catalog: UpgradeCatalog):
        self._surface = surface
        self._catalog = catalog

    @property
    def surface(self) -> DisplaySurface:
        return self._surface

    def refresh(self, state: GameState) -> None:
        """按状态重新渲染所有数值"""
        self._surface.render(DisplayElements.MEOWS, format_amount(state.meows))
        self._surface.render(DisplayElements.MULTIPLIER, format_multiplier(state.multiplier))
        self._surface.render(DisplayElements.OWNED_MULT, format_multiplier(state.multiplier))
        self._surface.render(DisplayElements.TOTAL_EARNED, format_amount(state.total_earned))
        self._surface.render(DisplayElements.TOTAL_SPENT, format_amount(state.total_spent))
        self._surface.render(DisplayElements.OWNED_LIST, self.owned_list_text(state))

    def owned_list_text(self, state: GameState) -> str:
        if not state.owned:
            return NO_UPGRADES_TEXT
        lines = []
        for upgrade_id in state.owned:
            upgrade = self._catalog.get(upgrade_id)
            if upgrade is not None:
                lines.append(f"• {upgrade.title} — {upgrade.desc}")
        return '\n'.join(lines)

    def render_rate(self, rate: float) -> None:
        self._surface.render(DisplayElements.CLICKS_PER_SEC, format_rate(rate))

    def render_time(self, seconds: int) -> None:
        self._surface.render(DisplayElements.TIME_PLAYED, format_duration(seconds))
