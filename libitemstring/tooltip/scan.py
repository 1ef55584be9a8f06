"""Tooltip scanning for the item level the client actually renders.

The scan surface is host UI infrastructure: something that can be cleared,
filled from a hyperlink and read back line by line. One surface is shared
per process, so it is leased exclusively through ``ScanTip.acquire()``.
"""
from __future__ import annotations

import re
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from loguru import logger

from libitemstring.config import ITEM_LEVEL_FORMAT, TOOLTIP_MAXLINE_LEVEL
from libitemstring.errors import ScanSurfaceBusy


class ScanSurface(Protocol):
    def clear_lines(self) -> None: ...

    def set_hyperlink(self, item_link: str) -> None: ...

    def num_lines(self) -> int: ...

    def line_text(self, index: int) -> Optional[str]:
        """Text of the left-hand line at 1-based ``index``."""
        ...


class StaticTooltipSurface:
    """Scan surface rendering pre-recorded tooltip lines.

    ``render`` maps an item link to the lines its tooltip shows, e.g. an
    item catalog's ``lookup`` returning ItemInfo.tooltip.
    """

    def __init__(self, render):
        self._render = render
        self._lines: list[str] = []

    @classmethod
    def from_catalog(cls, catalog) -> StaticTooltipSurface:
        def render(item_link):
            info = catalog.lookup(item_link)
            return info.tooltip if info else []
        return cls(render)

    def clear_lines(self) -> None:
        self._lines = []

    def set_hyperlink(self, item_link: str) -> None:
        self._lines = list(self._render(item_link) or [])

    def num_lines(self) -> int:
        return len(self._lines)

    def line_text(self, index: int) -> Optional[str]:
        if 1 <= index <= len(self._lines):
            return self._lines[index - 1]
        return None


class ScanTip:
    """Owner of the shared scan surface; hands it out one caller at a time."""

    def __init__(self, surface: ScanSurface):
        self.surface = surface
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def acquire(self) -> Iterator[ScanSurface]:
        """Lease the surface; it is cleared again on every exit path.

        Raises ScanSurfaceBusy if the surface is already leased, including
        by the calling code itself.
        """
        if not self._lock.acquire(blocking=False):
            raise ScanSurfaceBusy("Tooltip scan surface is already in use")
        logger.debug("Scan surface acquired")
        try:
            self.surface.clear_lines()
            yield self.surface
        finally:
            try:
                self.surface.clear_lines()
            finally:
                self._lock.release()
                logger.debug("Scan surface released")


def item_level_pattern(fmt: str = ITEM_LEVEL_FORMAT) -> re.Pattern[str]:
    """Build the extraction regex from a localized format such as 'Item Level %d'."""
    return re.compile(re.escape(fmt).replace("%d", r"(\d+)"))


ITEM_LEVEL_PATTERN = item_level_pattern()


def get_tooltip_item_level(item_link: str, scan_tip: ScanTip,
                           pattern: re.Pattern[str] = ITEM_LEVEL_PATTERN,
                           max_lines: int = TOOLTIP_MAXLINE_LEVEL) -> Optional[int]:
    """Scan the rendered tooltip for the item level.

    Line 1 is the item name; line 2 may already be the level, or an upgrade
    type such as "Mythic Warforged", so lines 2..max_lines are tried in order.
    """
    with scan_tip.acquire() as tip:
        tip.set_hyperlink(item_link)
        for i in range(2, min(tip.num_lines(), max_lines) + 1):
            line = tip.line_text(i)
            if not line:
                continue
            m = pattern.search(line)
            if m:
                return int(m.group(1))
    return None
