"""
Tests for the heuristic item level adjustment
"""
from libitemstring.itemstring.levels import (
    DEFAULT_TABLES,
    LevelAdjustTables,
    get_upgraded_item_level,
    get_upgraded_item_level_from_catalog,
)
from libitemstring.itemstring.record import ItemString

# numBonusIDs=2 (bonusID1=69, bonusID2=96), upgradeValue=1
UPGRADED = "item:128955" + ":" * 12 + "2:69:96:1"
# numBonusIDs=2 (bonusID1=69, bonusID2=96), no upgradeValue
TIMEWARPED = "item:128955" + ":" * 12 + "2:69:96"


class StubCatalog:
    def __init__(self, level):
        self.level = level
        self.asked = []

    def item_level(self, item_link):
        self.asked.append(item_link)
        return self.level


class TestUpgradedItemLevel:

    def test_no_base_level_is_no_result(self):
        rec = ItemString.new(UPGRADED)
        assert get_upgraded_item_level(rec, None) is None

    def test_upgrade_adjustment_above_threshold(self):
        rec = ItemString.new(UPGRADED)
        assert rec.upgradeValue == 1
        assert get_upgraded_item_level(rec, 500) == 508

    def test_upgrade_ignored_below_threshold(self):
        rec = ItemString.new(UPGRADED)
        assert get_upgraded_item_level(rec, 449) == 449

    def test_unlisted_upgrade_returns_base(self):
        rec = ItemString.new("item:1" + ":" * 13 + "5")
        assert get_upgraded_item_level(rec, 600) == 600

    def test_warforged_table_wins_over_timewarped(self):
        tables = LevelAdjustTables(timewarped={69: 675}, timewarped_warforged={96: 690})
        rec = ItemString.new(TIMEWARPED)
        assert get_upgraded_item_level(rec, 660, tables) == 690

    def test_timewarped_table_used_without_warforged_entry(self):
        tables = LevelAdjustTables(timewarped={69: 675})
        rec = ItemString.new(TIMEWARPED)
        assert get_upgraded_item_level(rec, 660, tables) == 675

    def test_zero_table_entry_is_honored(self):
        tables = LevelAdjustTables(timewarped={69: 0})
        rec = ItemString.new(TIMEWARPED)
        assert get_upgraded_item_level(rec, 660, tables) == 0

    def test_no_bonus_ids_returns_base(self):
        tables = LevelAdjustTables(timewarped={69: 675})
        rec = ItemString.new("item:128955")
        assert get_upgraded_item_level(rec, 660, tables) == 660

    def test_base_level_from_catalog(self):
        catalog = StubCatalog(500)
        rec = ItemString.new(f"|H{UPGRADED}|h[x]|h")
        assert get_upgraded_item_level_from_catalog(rec, catalog) == 508
        assert catalog.asked == [UPGRADED]


class TestTables:

    def test_defaults(self):
        assert DEFAULT_TABLES.upgraded == {1: 8}
        assert DEFAULT_TABLES.timewarped == {}
        assert DEFAULT_TABLES.timewarped_warforged == {}

    def test_merged_layers_overrides(self):
        merged = DEFAULT_TABLES.merged({"upgraded": {2: 12}, "timewarped": {615: 660}})
        assert merged.upgraded == {1: 8, 2: 12}
        assert merged.timewarped == {615: 660}
        assert DEFAULT_TABLES.upgraded == {1: 8}
