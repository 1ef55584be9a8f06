"""Heuristic item level adjustment from item string properties.

New upgrade encodings are added with every content update, so this lookup
is unreliable. Prefer the tooltip scan (``LibItemString.get_true_item_level``),
which reads the level the client actually renders.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from libitemstring.config import UPGRADE_MIN_ITEM_LEVEL
from libitemstring.itemstring.record import ItemString

# Level added per upgradeValue (1/1 upgrade adds 8)
UPGRADED_LEVEL_ADJUST: dict[int, int] = {
    1: 8,
}

# Timewarped bonusID -> fixed item level (not an amount)
TIMEWARPED_LEVEL_ADJUST: dict[int, int] = {}

# Timewarped Warforged bonusID -> fixed item level (not an amount)
TIMEWARPED_WARFORGED_LEVEL_ADJUST: dict[int, int] = {}


@dataclass
class LevelAdjustTables:
    upgraded: dict[int, int] = field(default_factory=lambda: dict(UPGRADED_LEVEL_ADJUST))
    timewarped: dict[int, int] = field(default_factory=lambda: dict(TIMEWARPED_LEVEL_ADJUST))
    timewarped_warforged: dict[int, int] = field(
        default_factory=lambda: dict(TIMEWARPED_WARFORGED_LEVEL_ADJUST))

    def merged(self, overrides: dict[str, dict[int, int]]) -> LevelAdjustTables:
        """Return a copy with extra entries from a settings table layered on top."""
        return LevelAdjustTables(
            upgraded={**self.upgraded, **overrides.get("upgraded", {})},
            timewarped={**self.timewarped, **overrides.get("timewarped", {})},
            timewarped_warforged={
                **self.timewarped_warforged,
                **overrides.get("timewarped_warforged", {}),
            },
        )


DEFAULT_TABLES = LevelAdjustTables()


def get_upgraded_item_level(record: ItemString, base_item_level: Optional[int],
                            tables: LevelAdjustTables = DEFAULT_TABLES) -> Optional[int]:
    """Adjust ``base_item_level`` for upgrades and timewarping.

    Returns None when the base level is unknown so callers can fall back to
    a tooltip scan. Only items of level 450 and above carry upgrades.
    """
    if base_item_level is None:
        return None

    timewarp = record.bonusID1
    warforged = record.bonusID2
    upgrade_value = record.upgradeValue

    if base_item_level >= UPGRADE_MIN_ITEM_LEVEL and upgrade_value in tables.upgraded:
        return base_item_level + tables.upgraded[upgrade_value]

    level = tables.timewarped_warforged.get(warforged)
    if level is not None:
        return level
    level = tables.timewarped.get(timewarp)
    if level is not None:
        return level
    return base_item_level


def get_upgraded_item_level_from_catalog(record: ItemString, catalog,
                                         tables: LevelAdjustTables = DEFAULT_TABLES) -> Optional[int]:
    """Same as get_upgraded_item_level, with the base level taken from an item catalog."""
    return get_upgraded_item_level(record, catalog.item_level(record.source), tables)
