"""Item catalog: base attributes for an item link.

The catalog file is JSON keyed by itemID:

    {"items": {"128955": {"name": "...", "rarity": 4, "item_level": 750,
                          "stack_count": 1, "icon": "...", "vendor_price": 0,
                          "tooltip": ["Name", "Item Level 750", ...]}}}
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from loguru import logger

from libitemstring.errors import CatalogError
from libitemstring.itemstring.record import ItemString


@dataclass
class ItemInfo:
    """Base attributes of one item."""
    item_id: int
    name: str = ""
    rarity: int = 1
    item_level: Optional[int] = None
    stack_count: int = 1
    icon: str = ""
    vendor_price: int = 0
    tooltip: list[str] = field(default_factory=list)


class ItemCatalog(Protocol):
    def lookup(self, item_link: str) -> Optional[ItemInfo]: ...

    def item_level(self, item_link: str) -> Optional[int]: ...


def _parse_item(item_id: int, data: dict) -> ItemInfo:
    if not isinstance(data, dict):
        raise CatalogError(f"Item {item_id}: entry must be an object")
    tooltip = data.get("tooltip", [])
    if not isinstance(tooltip, list):
        raise CatalogError(f"Item {item_id}: 'tooltip' must be a list of lines")
    try:
        return ItemInfo(
            item_id=item_id,
            name=str(data.get("name", "")),
            rarity=int(data.get("rarity", 1)),
            item_level=int(data["item_level"]) if data.get("item_level") is not None else None,
            stack_count=int(data.get("stack_count", 1)),
            icon=str(data.get("icon", "")),
            vendor_price=int(data.get("vendor_price", 0)),
            tooltip=[str(line) for line in tooltip],
        )
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Item {item_id}: {e}") from e


class JsonCatalog:
    """In-memory catalog loaded from a JSON file, keyed by itemID."""

    def __init__(self, items: Optional[dict[int, ItemInfo]] = None):
        self.items: dict[int, ItemInfo] = items if items is not None else {}
        self._record = ItemString()

    @classmethod
    def load(cls, path: Path) -> JsonCatalog:
        """Load a catalog file. Raises CatalogError on unreadable or malformed data."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}") from e

        raw_items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(raw_items, dict):
            raise CatalogError(f"Catalog {path} has no 'items' object")

        items = {}
        for key, entry in raw_items.items():
            try:
                item_id = int(key)
            except ValueError:
                raise CatalogError(f"Catalog {path}: item key {key!r} is not an itemID") from None
            items[item_id] = _parse_item(item_id, entry)

        logger.debug("Loaded {} items from catalog {}", len(items), path)
        return cls(items)

    def _item_id(self, item_link: str) -> Optional[int]:
        record = ItemString.new(item_link, self._record)
        if not record:
            return None
        return record.itemID

    def lookup(self, item_link: str) -> Optional[ItemInfo]:
        """Look up an item by link, item string or bare itemID."""
        if isinstance(item_link, int):
            return self.items.get(item_link)
        item_id = self._item_id(item_link)
        if item_id is None:
            return None
        return self.items.get(item_id)

    def item_level(self, item_link: str) -> Optional[int]:
        info = self.lookup(item_link)
        return info.item_level if info else None

    def search(self, query: str) -> list[ItemInfo]:
        """Search items by name substring (case-insensitive)."""
        query_lower = query.lower()
        return [info for info in self.items.values() if query_lower in info.name.lower()]

    @property
    def count(self) -> int:
        return len(self.items)
