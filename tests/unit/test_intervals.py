"""
Тесты для intervals: ValueRange, merge_ranges, apply_table_forward, seed_ranges
"""

import pytest

from almanac.core.domain import Category, RangeRule, RuleTable
from almanac.engine import ValueRange, apply_table_forward, merge_ranges, seed_ranges


def _r(start: int, end: int) -> ValueRange:
    return ValueRange.from_bounds(start, end)


class TestValueRange:
    def test_bounds(self) -> None:
        r = ValueRange(start=79, length=14)
        assert r.end == 93
        assert 79 in r
        assert 93 not in r
        assert not r.is_empty

    def test_from_bounds_clamps_to_empty(self) -> None:
        assert _r(10, 5).is_empty


class TestSeedRanges:
    def test_pairs(self) -> None:
        assert seed_ranges([79, 14, 55, 13]) == [
            ValueRange(start=79, length=14),
            ValueRange(start=55, length=13),
        ]

    def test_odd_length_rejected(self) -> None:
        with pytest.raises(ValueError):
            seed_ranges([79, 14, 55])


class TestMergeRanges:
    def test_overlapping_and_adjacent(self) -> None:
        assert merge_ranges([_r(10, 20), _r(0, 5), _r(5, 8), _r(15, 30)]) == [_r(0, 8), _r(10, 30)]

    def test_contained(self) -> None:
        assert merge_ranges([_r(0, 100), _r(10, 20)]) == [_r(0, 100)]

    def test_empty_dropped(self) -> None:
        assert merge_ranges([_r(3, 3), _r(1, 2)]) == [_r(1, 2)]
        assert merge_ranges([]) == []


class TestApplyTableForward:
    @pytest.fixture
    def table(self) -> RuleTable:
        return RuleTable(
            source=Category.SEED,
            destination=Category.SOIL,
            rules=(RangeRule.from_triple((50, 98, 2)), RangeRule.from_triple((52, 50, 48))),
        )

    def test_fully_inside_rule(self, table: RuleTable) -> None:
        assert apply_table_forward([_r(79, 93)], table) == [_r(81, 95)]

    def test_uncovered_is_identity(self, table: RuleTable) -> None:
        assert apply_table_forward([_r(0, 10)], table) == [_r(0, 10)]

    def test_split_across_rules_and_gap(self, table: RuleTable) -> None:
        # [40, 100): [40, 50) identity, [50, 98) → [52, 100), [98, 100) → [50, 52)
        assert apply_table_forward([_r(40, 100)], table) == [_r(40, 100)]

    def test_split_partial(self, table: RuleTable) -> None:
        # [96, 105): [96, 98) → [98, 100), [98, 100) → [50, 52), [100, 105) identity
        assert apply_table_forward([_r(96, 105)], table) == [_r(50, 52), _r(98, 105)]

    def test_first_match_wins(self) -> None:
        table = RuleTable(
            source=Category.SEED,
            destination=Category.SOIL,
            rules=(RangeRule.from_triple((1000, 0, 10)), RangeRule.from_triple((2000, 5, 10))),
        )
        # [0, 10) целиком забирает первое правило; второе получает только [10, 15)
        assert apply_table_forward([_r(0, 15)], table) == [_r(1000, 1010), _r(2005, 2010)]

    def test_empty_rule_ignored(self) -> None:
        table = RuleTable(
            source=Category.SEED,
            destination=Category.SOIL,
            rules=(RangeRule.from_triple((1000, 0, 0)),),
        )
        assert apply_table_forward([_r(0, 5)], table) == [_r(0, 5)]
