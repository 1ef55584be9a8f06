"""ItemString record: decode, named field access and re-encoding.

An item string looks like ``item:128955:::-55:::::99:577::11:2:69:96:3``.
The first segment is the link type, every following segment is an integer
field; empty segments decode to 0. Fields are addressed 1-based, either by
position or by the names in ``FIELD_INDEX``:

    is_ = ItemString.new(item_link)
    if is_.enchant != 0:
        ...
    item_id = is_[1]
    item_id = is_.itemID
    upgrade = is_[-1]            # first field after the bonusIDs
    label = str(is_)             # back to an item string
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from libitemstring.config import FIELD_SEPARATOR, ITEMSTRING_PATTERN
from libitemstring.itemstring.fields import (
    BONUS_COUNT_INDEX,
    FIELD_INDEX,
    bonus_id_index,
    get_field_name,
    resolve_index,
)

FieldKey = Union[int, str]

_INT_RE = re.compile(r"[+-]?\d+")

# Names that must keep regular attribute semantics
_OWN_ATTRS = frozenset({"link_type", "fields", "source"})


def _to_int(segment: str) -> int:
    """Decode one segment; empty or non-numeric segments become 0."""
    segment = segment.strip()
    if _INT_RE.fullmatch(segment):
        return int(segment)
    return 0


@dataclass(slots=True)
class ItemString:
    """A decoded item string.

    A record carrying no data (non-string input, no embedded payload) has
    no fields and ``link_type`` None; every lookup on it degrades to 0/None.
    """
    link_type: Optional[str] = None
    fields: list[int] = field(default_factory=list)
    source: Optional[str] = None

    @classmethod
    def new(cls, item_link, record: Optional[ItemString] = None,
            pattern: re.Pattern[str] = ITEMSTRING_PATTERN) -> ItemString:
        """Decode the first item string embedded in ``item_link``.

        Pass ``record`` to recycle an existing instance instead of
        allocating a new one.
        """
        if record is None:
            record = cls()

        item_string = None
        if isinstance(item_link, str):
            m = pattern.search(item_link)
            if m:
                item_string = m.group(1)

        record.parse(item_string)
        return record

    def parse(self, item_string: Optional[str]) -> None:
        """Reset this record and fill it from a bare item string."""
        self.fields.clear()
        self.link_type = None
        self.source = item_string if isinstance(item_string, str) else None

        if self.source is None:
            return

        segments = self.source.split(FIELD_SEPARATOR)
        # A trailing separator leaves one empty capture that is not a field
        if len(segments) > 1 and segments[-1] == "":
            segments.pop()

        self.link_type = segments[0]
        self.fields.extend(_to_int(seg) for seg in segments[1:])

    # -- access ----------------------------------------------------------

    @property
    def num_bonus_ids(self) -> int:
        return self._at(BONUS_COUNT_INDEX) or 0

    def _at(self, index: int) -> Optional[int]:
        if 1 <= index <= len(self.fields):
            return self.fields[index - 1]
        return None

    def get(self, key: FieldKey) -> Optional[int]:
        """Look up a field by 1-based index, negative index or name.

        Named fields default to 0 when missing; indices and bonusID names
        outside this record return None.
        """
        if isinstance(key, int) and not isinstance(key, bool):
            if key < 0:
                return self._at(resolve_index(key, self.num_bonus_ids))
            return self._at(key)

        if not isinstance(key, str):
            return None

        position = FIELD_INDEX.get(key)
        if position is not None:
            value = self._at(resolve_index(position, self.num_bonus_ids))
            return 0 if value is None else value

        bonus_index = bonus_id_index(key)
        if bonus_index is not None:
            if 1 <= bonus_index <= self.num_bonus_ids:
                return self._at(BONUS_COUNT_INDEX + bonus_index)
        return None

    def __getitem__(self, key: FieldKey) -> Optional[int]:
        return self.get(key)

    def __getattr__(self, name: str) -> Optional[int]:
        if name.startswith("_") or name in _OWN_ATTRS:
            raise AttributeError(name)
        return self.get(name)

    def field_name(self, index: int) -> str:
        """Name of the field at ``index`` given this record's bonus count."""
        return get_field_name(index, self.num_bonus_ids)

    def named_fields(self) -> list[tuple[int, str, int]]:
        """Return (index, name, value) for every field in order."""
        n = self.num_bonus_ids
        return [
            (i, get_field_name(i, n), value)
            for i, value in enumerate(self.fields, start=1)
        ]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[int]:
        return iter(self.fields)

    def __bool__(self) -> bool:
        return self.link_type is not None

    # -- encode ----------------------------------------------------------

    def encode(self) -> str:
        """Convert back to an item string; 0 is written as an empty segment."""
        if self.link_type is None:
            return ""

        parts = [self.link_type]
        parts.extend("" if value == 0 else str(value) for value in self.fields)
        text = FIELD_SEPARATOR.join(parts)
        # Keep a trailing empty field from being read back as the split artifact
        if self.fields and self.fields[-1] == 0:
            text += FIELD_SEPARATOR
        return text

    def __str__(self) -> str:
        return self.encode()
