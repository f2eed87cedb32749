"""Tests for the calendar rollup — bucket keys, ordering, cost policy."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from intelliwatt.exceptions import ValidationError
from intelliwatt.services.rollup import MAX_BUCKETS, bucket_key, normalize_mode, rollup


@dataclass
class Entry:
    kwh: float
    cost: float
    created_at: datetime


def _day(s: str, hour: int = 12) -> datetime:
    return datetime.strptime(s, "%Y-%m-%d").replace(hour=hour)


def test_daily_buckets_sum_stored_cost():
    entries = [
        Entry(1.0, 15.0, _day("2024-01-01")),
        Entry(2.0, 30.0, _day("2024-01-01", 18)),
        Entry(0.5, 7.5, _day("2024-01-02")),
    ]
    buckets = rollup(entries, mode="daily")

    assert [b.key for b in buckets] == ["2024-01-02", "2024-01-01"]
    assert buckets[0].total_kwh == pytest.approx(0.5)
    assert buckets[0].total_cost == pytest.approx(7.5)
    assert buckets[1].total_kwh == pytest.approx(3.0)
    assert buckets[1].total_cost == pytest.approx(45.0)
    assert buckets[1].entry_count == 2


def test_explicit_rate_recomputes_cost():
    entries = [
        Entry(1.0, 15.0, _day("2024-01-01")),
        Entry(2.0, 30.0, _day("2024-01-01")),
    ]
    buckets = rollup(entries, mode="daily", rate=20.0)
    assert buckets[0].total_kwh == pytest.approx(3.0)
    assert buckets[0].total_cost == pytest.approx(60.0)


def test_rate_zero_is_an_explicit_rate():
    buckets = rollup([Entry(1.0, 15.0, _day("2024-01-01"))], rate=0.0)
    assert buckets[0].total_cost == 0.0


def test_non_finite_rate_rejected():
    with pytest.raises(ValidationError):
        rollup([Entry(1.0, 15.0, _day("2024-01-01"))], rate=float("nan"))


def test_weekly_uses_iso_year_and_week():
    # 2024-12-30 is Monday of ISO week 1 of 2025; 2021-01-01 belongs to 2020-W53.
    assert bucket_key(_day("2024-12-30"), "weekly") == "2025-W01"
    assert bucket_key(_day("2021-01-01"), "weekly") == "2020-W53"
    assert bucket_key(_day("2024-03-04"), "weekly") == "2024-W10"


def test_weekly_rollup_groups_monday_to_sunday():
    entries = [
        Entry(1.0, 15.0, _day("2024-01-01")),  # Monday, W01
        Entry(1.0, 15.0, _day("2024-01-07")),  # Sunday, W01
        Entry(1.0, 15.0, _day("2024-01-08")),  # Monday, W02
    ]
    buckets = rollup(entries, mode="weekly")
    assert [(b.key, b.entry_count) for b in buckets] == [("2024-W02", 1), ("2024-W01", 2)]


def test_monthly_rollup():
    entries = [
        Entry(1.0, 1.0, _day("2024-01-31")),
        Entry(2.0, 2.0, _day("2024-02-01")),
        Entry(3.0, 3.0, _day("2024-02-29")),
    ]
    buckets = rollup(entries, mode="monthly")
    assert [b.key for b in buckets] == ["2024-02", "2024-01"]
    assert buckets[0].total_kwh == pytest.approx(5.0)


def test_aware_timestamps_are_bucketed_in_utc():
    # 23:30 at UTC-2 is 01:30 UTC the next day
    ts = datetime(2024, 1, 1, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
    assert bucket_key(ts, "daily") == "2024-01-02"


@pytest.mark.parametrize("mode", ["hourly", "", None, "yearly"])
def test_unsupported_mode_falls_back_to_daily(mode):
    assert normalize_mode(mode) == "daily"
    buckets = rollup([Entry(1.0, 1.0, _day("2024-05-06"))], mode=mode)
    assert buckets[0].key == "2024-05-06"


def test_mode_is_case_insensitive():
    assert normalize_mode(" Weekly ") == "weekly"


@pytest.mark.parametrize("mode", ["daily", "weekly", "monthly"])
def test_empty_input_gives_empty_result(mode):
    assert rollup([], mode=mode) == []


def test_result_sorted_descending_and_truncated():
    start = _day("2024-01-01")
    entries = [Entry(1.0, 1.0, start + timedelta(days=i)) for i in range(70)]
    # shuffled insertion order must not matter
    entries = entries[35:] + entries[:35]

    buckets = rollup(entries, mode="daily")

    assert len(buckets) == MAX_BUCKETS
    keys = [b.key for b in buckets]
    assert keys == sorted(keys, reverse=True)
    assert keys[0] == (start + timedelta(days=69)).strftime("%Y-%m-%d")
    assert keys[-1] == (start + timedelta(days=10)).strftime("%Y-%m-%d")


def test_limit_cannot_exceed_max_buckets():
    start = _day("2024-01-01")
    entries = [Entry(1.0, 1.0, start + timedelta(days=i)) for i in range(70)]
    assert len(rollup(entries, limit=500)) == MAX_BUCKETS
    assert len(rollup(entries, limit=7)) == 7


@pytest.mark.parametrize("mode", ["daily", "weekly", "monthly"])
def test_every_entry_counted_exactly_once(mode):
    start = datetime(2023, 11, 20, 6, 0)
    entries = [
        Entry(0.1 * (i % 5 + 1), 1.5 * (i % 5 + 1), start + timedelta(hours=7 * i))
        for i in range(200)
    ]
    buckets = rollup(entries, mode=mode)

    assert sum(b.entry_count for b in buckets) == len(entries)
    assert sum(b.total_kwh for b in buckets) == pytest.approx(sum(e.kwh for e in entries))
    assert sum(b.total_cost for b in buckets) == pytest.approx(sum(e.cost for e in entries))
    assert len({b.key for b in buckets}) == len(buckets)


def test_sums_are_not_rounded():
    entries = [Entry(0.004, 0.06, _day("2024-01-01")) for _ in range(3)]
    buckets = rollup(entries)
    assert buckets[0].total_kwh == pytest.approx(0.012)
    assert buckets[0].total_cost == pytest.approx(0.18)
