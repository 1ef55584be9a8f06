"""Export decoded item strings as JSON."""
from __future__ import annotations

import json

from libitemstring.itemstring.record import ItemString


def record_to_dict(record: ItemString) -> dict:
    """Named view of one record. Field names repeat only for "unknown" positions."""
    fields = [
        {"index": index, "name": name, "value": value}
        for index, name, value in record.named_fields()
    ]
    bonus_ids = [record.get(f"bonusID{k}") for k in range(1, min(record.num_bonus_ids, len(record)) + 1)]
    return {
        "source": record.source,
        "link_type": record.link_type,
        "item_string": record.encode(),
        "bonus_ids": [b for b in bonus_ids if b is not None],
        "fields": fields,
    }


def export_json(records: list[ItemString]) -> str:
    """Export records as JSON string."""
    return json.dumps([record_to_dict(rec) for rec in records], indent=2)
