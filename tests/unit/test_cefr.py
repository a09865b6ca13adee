"""Unit tests for lexio/models/cefr.py: ordering and total parsing."""

from itertools import product

import pytest

from lexio.models.cefr import CefrLevel, DEFAULT_LEVEL


ALL_LEVELS = list(CefrLevel)


class TestRank:
    def test_ranks_run_a1_to_c2(self):
        assert [level.rank for level in ALL_LEVELS] == [1, 2, 3, 4, 5, 6]
        assert [level.value for level in ALL_LEVELS] == ["A1", "A2", "B1", "B2", "C1", "C2"]

    def test_is_lower_than_matches_rank_for_all_pairs(self):
        for a, b in product(ALL_LEVELS, repeat=2):
            assert a.is_lower_than(b) == (a.rank < b.rank)

    def test_antisymmetric(self):
        for a, b in product(ALL_LEVELS, repeat=2):
            assert not (a.is_lower_than(b) and b.is_lower_than(a))

    def test_transitive(self):
        for a, b, c in product(ALL_LEVELS, repeat=3):
            if a.is_lower_than(b) and b.is_lower_than(c):
                assert a.is_lower_than(c)

    def test_level_is_not_lower_than_itself(self):
        for level in ALL_LEVELS:
            assert level.is_lower_than(level) is False


class TestParse:
    @pytest.mark.parametrize("text,expected", [
        ("A1", CefrLevel.A1),
        ("b2", CefrLevel.B2),
        ("  c1  ", CefrLevel.C1),
        ("C2\n", CefrLevel.C2),
    ])
    def test_recognized_values(self, text, expected):
        assert CefrLevel.parse(text) is expected

    @pytest.mark.parametrize("text", ["", "   ", "D1", "beginner", "A 1", "A1+", "🙂"])
    def test_unrecognized_strings_fall_back_to_a1(self, text):
        assert CefrLevel.parse(text) is CefrLevel.A1

    @pytest.mark.parametrize("value", [None, 3, 1.5, [], {}])
    def test_non_strings_fall_back_to_a1(self, value):
        assert CefrLevel.parse(value) is CefrLevel.A1

    def test_level_instance_passes_through(self):
        assert CefrLevel.parse(CefrLevel.B1) is CefrLevel.B1

    def test_default_level_is_a1(self):
        assert DEFAULT_LEVEL is CefrLevel.A1


class TestFormatting:
    def test_str_is_plain_code(self):
        assert str(CefrLevel.B1) == "B1"
        assert f"{CefrLevel.C2}" == "C2"
