"""Tests for period grouping and filtering."""
from __future__ import annotations

from param_explorer.loader import StrategyRecord, TestPeriod
from param_explorer.periods import (
    default_period,
    filter_by_period,
    group_by_period,
    list_periods,
    period_counts,
    period_key,
)


def _rec(sid: str, start: str, end: str) -> StrategyRecord:
    return StrategyRecord(sid, TestPeriod(start, end), {"x": 1.0}, {"total_profit_percent": 0.0})


JAN = ("2024-01-01", "2024-01-31")
FEB = ("2024-02-01", "2024-02-29")


def _records() -> list[StrategyRecord]:
    return [
        _rec("b1", *FEB),
        _rec("a1", *JAN),
        _rec("b2", *FEB),
        _rec("a2", *JAN),
        _rec("b3", *FEB),
    ]


class TestPeriodKey:
    def test_format(self) -> None:
        assert period_key(_rec("s", *JAN)) == "2024-01-01 to 2024-01-31"

    def test_matches_record_property(self) -> None:
        r = _rec("s", *FEB)
        assert period_key(r) == r.period_key == r.test_period.key


class TestListPeriods:
    def test_first_appearance_order_not_sorted(self) -> None:
        assert list_periods(_records()) == [
            "2024-02-01 to 2024-02-29",
            "2024-01-01 to 2024-01-31",
        ]

    def test_no_duplicates_and_covers_every_record(self) -> None:
        records = _records()
        periods = list_periods(records)
        assert len(periods) == len(set(periods))
        assert all(period_key(r) in periods for r in records)

    def test_empty(self) -> None:
        assert list_periods([]) == []


class TestFilterByPeriod:
    def test_preserves_relative_order(self) -> None:
        out = filter_by_period(_records(), "2024-02-01 to 2024-02-29")
        assert [r.id for r in out] == ["b1", "b2", "b3"]

    def test_other_period_excluded(self) -> None:
        records = [_rec("s1", *JAN), _rec("s2", *JAN), _rec("odd", *FEB)]
        first_key = period_key(records[0])
        out = filter_by_period(records, first_key)
        assert [r.id for r in out] == ["s1", "s2"]

    def test_exact_string_match(self) -> None:
        records = _records()
        assert filter_by_period(records, "2024-01-01 to 2024-01-31 ") == []
        assert filter_by_period(records, "2024-01-01 TO 2024-01-31") == []
        # Same dates written differently are different periods
        assert filter_by_period([_rec("s", "2024-1-1", "2024-1-31")], "2024-01-01 to 2024-01-31") == []

    def test_unset_key_returns_empty(self) -> None:
        assert filter_by_period(_records(), None) == []
        assert filter_by_period(_records(), "") == []

    def test_unknown_key_returns_empty(self) -> None:
        assert filter_by_period(_records(), "1999-01-01 to 1999-12-31") == []

    def test_only_matching_records(self) -> None:
        key = "2024-01-01 to 2024-01-31"
        assert all(period_key(r) == key for r in filter_by_period(_records(), key))


class TestDefaultPeriod:
    def test_first_loaded_not_first_sorted(self) -> None:
        assert default_period(_records()) == "2024-02-01 to 2024-02-29"

    def test_empty_is_none(self) -> None:
        assert default_period([]) is None


class TestGrouping:
    def test_group_by_period(self) -> None:
        groups = group_by_period(_records())
        assert list(groups) == ["2024-02-01 to 2024-02-29", "2024-01-01 to 2024-01-31"]
        assert [r.id for r in groups["2024-01-01 to 2024-01-31"]] == ["a1", "a2"]

    def test_period_counts(self) -> None:
        counts = period_counts(_records())
        assert counts.to_dict() == {"2024-02-01 to 2024-02-29": 3, "2024-01-01 to 2024-01-31": 2}
        assert list(counts.index) == ["2024-02-01 to 2024-02-29", "2024-01-01 to 2024-01-31"]

    def test_period_counts_empty(self) -> None:
        assert period_counts([]).empty
