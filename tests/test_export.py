"""
Tests for JSON and CSV export of decoded item strings
"""
import csv
import io
import json

from libitemstring.export.csv_export import export_csv
from libitemstring.export.json_export import export_json, record_to_dict
from libitemstring.itemstring.record import ItemString

ITEM_STRING = "item:128955:::-55:::::99:577::11:2:69:96:3"


class TestJsonExport:

    def test_record_to_dict(self):
        entry = record_to_dict(ItemString.new(ITEM_STRING))
        assert entry["link_type"] == "item"
        assert entry["item_string"] == ITEM_STRING
        assert entry["bonus_ids"] == [69, 96]
        assert entry["fields"][0] == {"index": 1, "name": "itemID", "value": 128955}
        assert entry["fields"][-1] == {"index": 16, "name": "upgradeValue", "value": 3}

    def test_bonus_count_larger_than_fields(self):
        entry = record_to_dict(ItemString.new("item:1" + ":" * 12 + "99:5"))
        assert entry["bonus_ids"] == [5]

    def test_export_json(self):
        data = json.loads(export_json([ItemString.new(ITEM_STRING), ItemString.new(None)]))
        assert len(data) == 2
        assert data[1] == {
            "source": None,
            "link_type": None,
            "item_string": "",
            "bonus_ids": [],
            "fields": [],
        }


class TestCsvExport:

    def test_rows_per_field(self):
        rows = list(csv.reader(io.StringIO(export_csv([ItemString.new(ITEM_STRING)]))))
        assert rows[0] == ["record", "item_string", "index", "field", "value"]
        assert len(rows) == 1 + 16
        assert rows[1] == ["1", ITEM_STRING, "1", "itemID", "128955"]
        assert rows[15] == ["1", ITEM_STRING, "15", "bonusID2", "96"]

    def test_empty_record_row(self):
        rows = list(csv.reader(io.StringIO(export_csv([ItemString.new("nothing")]))))
        assert rows[1] == ["1", "", "", "", ""]
