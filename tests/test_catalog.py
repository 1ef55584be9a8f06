"""
Tests for the JSON item catalog
"""
import json

import pytest

from libitemstring.catalog import ItemInfo, JsonCatalog
from libitemstring.errors import CatalogError

LINK = "|cffa335ee|Hitem:128955:::-55:::::99:577::11:2:69:96:3|h[Ashbringer]|h|r"


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({
        "items": {
            "128955": {
                "name": "Ashbringer",
                "rarity": 6,
                "item_level": 750,
                "icon": "inv_sword_2h_artifactashbringer_d_01",
                "vendor_price": 0,
                "tooltip": ["Ashbringer", "Artifact", "Item Level 750"],
            },
            "6948": {"name": "Hearthstone", "stack_count": 1},
        }
    }), encoding="utf-8")
    return path


class TestJsonCatalog:

    def test_load(self, catalog_file):
        catalog = JsonCatalog.load(catalog_file)
        assert catalog.count == 2

    def test_lookup_by_link(self, catalog_file):
        catalog = JsonCatalog.load(catalog_file)
        info = catalog.lookup(LINK)
        assert info.name == "Ashbringer"
        assert info.rarity == 6
        assert info.tooltip[-1] == "Item Level 750"

    def test_lookup_by_item_string_and_id(self, catalog_file):
        catalog = JsonCatalog.load(catalog_file)
        assert catalog.lookup("item:6948").name == "Hearthstone"
        assert catalog.lookup(6948).name == "Hearthstone"

    def test_defaults(self, catalog_file):
        info = JsonCatalog.load(catalog_file).lookup(6948)
        assert info == ItemInfo(item_id=6948, name="Hearthstone")
        assert info.item_level is None

    def test_item_level(self, catalog_file):
        catalog = JsonCatalog.load(catalog_file)
        assert catalog.item_level(LINK) == 750
        assert catalog.item_level("item:6948") is None
        assert catalog.item_level("item:1") is None
        assert catalog.item_level("no link here") is None
        assert catalog.item_level(None) is None

    def test_search(self, catalog_file):
        catalog = JsonCatalog.load(catalog_file)
        assert [i.item_id for i in catalog.search("hearth")] == [6948]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            JsonCatalog.load(tmp_path / "nope.json")

    @pytest.mark.parametrize("content", [
        "not json",
        "[]",
        '{"items": []}',
        '{"items": {"abc": {}}}',
        '{"items": {"1": "Sword"}}',
        '{"items": {"1": {"item_level": "high"}}}',
        '{"items": {"1": {"tooltip": "Item Level 5"}}}',
    ])
    def test_malformed(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(CatalogError):
            JsonCatalog.load(path)
