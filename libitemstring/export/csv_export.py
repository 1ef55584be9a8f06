"""Export decoded item strings as CSV, one row per field."""
from __future__ import annotations

import csv
import io

from libitemstring.itemstring.record import ItemString


def export_csv(records: list[ItemString]) -> str:
    """Export records as CSV string."""
    output = io.StringIO()
    writer = csv.writer(output)

    # Header
    writer.writerow(["record", "item_string", "index", "field", "value"])

    for n, rec in enumerate(records, start=1):
        item_string = rec.encode()
        if not rec:
            writer.writerow([n, "", "", "", ""])
            continue
        for index, name, value in rec.named_fields():
            writer.writerow([n, item_string, index, name, value])

    return output.getvalue()
