"""
Tests for field name/position metadata
"""
import pytest

from libitemstring.itemstring.fields import (
    BONUS_COUNT_INDEX,
    FIELD_INDEX,
    UNKNOWN,
    bonus_id_index,
    get_field_name,
    resolve_index,
)


class TestFieldIndex:

    def test_bonus_count_position(self):
        assert BONUS_COUNT_INDEX == 13
        assert FIELD_INDEX["itemID"] == 1
        assert FIELD_INDEX["upgradeValue"] == -1

    def test_resolve_positive_index_unchanged(self):
        assert resolve_index(4, 2) == 4

    @pytest.mark.parametrize("num_bonus_ids,expected", [(0, 14), (2, 16), (5, 19)])
    def test_resolve_negative_index_shifts_with_bonus_count(self, num_bonus_ids, expected):
        assert resolve_index(-1, num_bonus_ids) == expected

    def test_bonus_id_index(self):
        assert bonus_id_index("bonusID3") == 3
        assert bonus_id_index("bonusID") is None
        assert bonus_id_index("xbonusID3") is None
        assert bonus_id_index("bonusID3x") is None


class TestGetFieldName:

    def test_fixed_positions(self):
        assert get_field_name(1) == "itemID"
        assert get_field_name(4) == "gemID2"
        assert get_field_name(13) == "numBonusIDs"

    def test_negative_positions(self):
        assert get_field_name(-1) == "upgradeValue"
        assert get_field_name(-4) == "unknown3"
        assert get_field_name(-9) == UNKNOWN

    def test_zero_is_unknown(self):
        assert get_field_name(0) == UNKNOWN

    def test_beyond_bonus_count_without_record_is_bonus_id(self):
        assert get_field_name(14) == "bonusID1"
        assert get_field_name(20) == "bonusID7"

    def test_bonus_run_with_known_count(self):
        assert get_field_name(14, 2) == "bonusID1"
        assert get_field_name(15, 2) == "bonusID2"

    def test_after_bonus_run_uses_relative_names(self):
        assert get_field_name(16, 2) == "upgradeValue"
        assert get_field_name(17, 2) == "unknown1"
        assert get_field_name(19, 2) == "unknown3"
        assert get_field_name(20, 2) == UNKNOWN

    def test_no_bonus_ids(self):
        assert get_field_name(14, 0) == "upgradeValue"
