"""Named field positions of the item string format."""
from __future__ import annotations

import re
from typing import Optional

UNKNOWN = "unknown"

# 1-based position of each named field after the link type tag.
# A negative position is relative to the last bonusID index, so fields
# following the variable-length bonus run keep a stable name.
FIELD_INDEX: dict[str, int] = {
    "itemID": 1,
    "enchant": 2,
    "gemID1": 3,
    "gemID2": 4,
    "gemID3": 5,
    "gemID4": 6,
    "suffixID": 7,
    "uniqueID": 8,
    "linkLevel": 9,
    "specializationID": 10,
    "upgradeTypeID": 11,
    "instanceDifficultyID": 12,
    "numBonusIDs": 13,
    # bonusID1 = 14, bonusID2 = 15, ...
    "upgradeValue": -1,
    "unknown1": -2,
    "unknown2": -3,
    "unknown3": -4,
}

BONUS_COUNT_INDEX = FIELD_INDEX["numBonusIDs"]

# Reverse table for fixed and relative-to-end positions
_NAME_BY_INDEX: dict[int, str] = {index: name for name, index in FIELD_INDEX.items()}

_BONUS_ID_RE = re.compile(r"bonusID(\d+)")


def resolve_index(position: int, num_bonus_ids: int) -> int:
    """Resolve a configured position to an absolute 1-based field index."""
    if position < 0:
        return BONUS_COUNT_INDEX + num_bonus_ids + abs(position)
    return position


def bonus_id_index(name: str) -> Optional[int]:
    """Return k for a 'bonusID<k>' name, or None for any other name."""
    m = _BONUS_ID_RE.fullmatch(name)
    if m is None:
        return None
    return int(m.group(1))


def get_field_name(index: int, num_bonus_ids: Optional[int] = None) -> str:
    """Return the name of the item string field at the given index.

    Without ``num_bonus_ids`` every position past the bonus count field is
    reported as a bonusID. With it, positions after the bonus run are matched
    against the relative-to-end names instead.
    """
    if index < 0 or index <= BONUS_COUNT_INDEX:
        return _NAME_BY_INDEX.get(index, UNKNOWN)

    bonus_index = index - BONUS_COUNT_INDEX
    if num_bonus_ids is None or bonus_index <= num_bonus_ids:
        return f"bonusID{bonus_index}"

    return _NAME_BY_INDEX.get(-(bonus_index - num_bonus_ids), UNKNOWN)
