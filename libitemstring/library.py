"""Process-wide LibItemString instance.

Several addons may each ship their own copy of this library. Only one
instance is active per process: ``initialize()`` is a no-op when the same or
a newer version is already loaded, and ``upgrade()`` replaces an older one.
The tooltip scan surface is created once and carried across upgrades.

Changelog:
    REV-01 - Replaces the standalone upgraded item level helper, but stays compatible
    REV-02 - Added get_field_name(); negative indices address fields after
             the bonusIDs
"""
from __future__ import annotations

import re
from typing import Optional

from loguru import logger

from libitemstring.config import HYPERLINK_PATTERN, ITEMSTRING_PATTERN
from libitemstring.errors import LibraryNotInitialized, LibraryVersionError
from libitemstring.itemstring.fields import get_field_name
from libitemstring.itemstring.levels import DEFAULT_TABLES, get_upgraded_item_level
from libitemstring.itemstring.record import ItemString
from libitemstring.profiles import Settings
from libitemstring.tooltip.scan import (
    ScanSurface,
    ScanTip,
    get_tooltip_item_level,
    item_level_pattern,
)

REVISION = 2
__version__ = "2.0.0"

_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")

_active: Optional[LibItemString] = None


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse 'MAJOR.MINOR.PATCH'. Raises LibraryVersionError otherwise."""
    m = _VERSION_RE.fullmatch(version.strip()) if isinstance(version, str) else None
    if m is None:
        raise LibraryVersionError(f"Invalid library version: {version!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


class LibItemString:
    """One loaded version of the library and the resources it owns."""

    def __init__(self, version: str = __version__, scan_tip: Optional[ScanTip] = None,
                 settings: Optional[Settings] = None):
        self.version = version
        self.version_info = parse_version(version)
        self.scan_tip = scan_tip
        self.settings = settings or Settings()
        self.tables = DEFAULT_TABLES.merged(self.settings.level_adjust)
        self.item_level_pattern = item_level_pattern(self.settings.item_level_format)
        self.itemstring_pattern = (
            HYPERLINK_PATTERN if self.settings.all_hyperlinks else ITEMSTRING_PATTERN
        )

    def new(self, item_link, record: Optional[ItemString] = None) -> ItemString:
        """Decode an item link into a (possibly recycled) ItemString."""
        return ItemString.new(item_link, record, pattern=self.itemstring_pattern)

    @staticmethod
    def get_field_name(index: int, num_bonus_ids: Optional[int] = None) -> str:
        return get_field_name(index, num_bonus_ids)

    def get_upgraded_item_level(self, record: ItemString, catalog) -> Optional[int]:
        """Heuristic level from static tables. Prefer get_true_item_level()."""
        return get_upgraded_item_level(record, catalog.item_level(record.source), self.tables)

    def get_true_item_level(self, item_link: str) -> Optional[int]:
        """Return the item level read from a tooltip scan, or None."""
        if self.scan_tip is None:
            raise LibraryNotInitialized("No tooltip scan surface attached to the library")
        return get_tooltip_item_level(
            item_link,
            self.scan_tip,
            pattern=self.item_level_pattern,
            max_lines=self.settings.tooltip_max_lines,
        )


def initialize(version: str = __version__, surface: Optional[ScanSurface] = None,
               settings: Optional[Settings] = None) -> LibItemString:
    """Load the library unless the same or a newer version is already active.

    A ``surface`` is still attached to an already active instance that has none.
    """
    global _active
    requested = parse_version(version)
    if _active is not None and requested <= _active.version_info:
        logger.debug("LibItemString {} already loaded, skipping {}", _active.version, version)
        if _active.scan_tip is None and surface is not None:
            _active.scan_tip = ScanTip(surface)
            logger.debug("Attached scan surface to LibItemString {}", _active.version)
        return _active
    return upgrade(version, surface=surface, settings=settings)


def upgrade(version: str, surface: Optional[ScanSurface] = None,
            settings: Optional[Settings] = None) -> LibItemString:
    """Replace the active instance with a strictly newer version.

    The existing scan surface is kept; ``surface`` only applies when none is
    attached yet, and the previous settings carry over unless new ones are given.
    """
    global _active
    requested = parse_version(version)
    if _active is not None and requested <= _active.version_info:
        logger.debug("Not upgrading LibItemString {} to {}", _active.version, version)
        return _active

    scan_tip = _active.scan_tip if _active is not None else None
    if scan_tip is None and surface is not None:
        scan_tip = ScanTip(surface)

    if settings is None and _active is not None:
        settings = _active.settings

    previous = _active.version if _active is not None else None
    _active = LibItemString(version, scan_tip=scan_tip, settings=settings)
    if previous:
        logger.debug("Upgraded LibItemString {} -> {}", previous, version)
    else:
        logger.debug("Loaded LibItemString {}", version)
    return _active


def get_library() -> LibItemString:
    if _active is None:
        raise LibraryNotInitialized("Call libitemstring.library.initialize() first")
    return _active


def reset() -> None:
    """Unload the active instance (tests and embedding hosts)."""
    global _active
    _active = None


def get_upgraded_item_level_from_item_link(item_link: str) -> Optional[int]:
    """Obsolete: use get_library().get_true_item_level(item_link) instead."""
    return get_library().get_true_item_level(item_link)
