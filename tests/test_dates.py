"""Tests for the dates module."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gh_contrib import dates


def test_parse_timestamp_rfc3339_utc():
    assert dates.parse_timestamp("2025-04-22T12:00:00Z") == datetime(2025, 4, 22, 12, tzinfo=timezone.utc)


def test_parse_timestamp_with_offset():
    parsed = dates.parse_timestamp("2025-04-22T12:00:00+02:00")
    assert parsed == datetime(2025, 4, 22, 10, tzinfo=timezone.utc)


def test_parse_timestamp_invalid_or_empty():
    assert dates.parse_timestamp("invalid-date") is None
    assert dates.parse_timestamp("") is None
    assert dates.parse_timestamp(None) is None


def test_resolve_effective_date_prefers_closed_at():
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    result = dates.resolve_effective_date("2025-04-22T12:00:00Z", "2025-04-20T12:00:00Z", now)
    assert result == datetime(2025, 4, 22, 12, tzinfo=timezone.utc)


def test_resolve_effective_date_bad_closed_falls_to_created():
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    result = dates.resolve_effective_date("invalid-date", "2025-05-01T12:00:00Z", now)
    assert result == datetime(2025, 5, 1, 12, tzinfo=timezone.utc)


def test_resolve_effective_date_falls_back_to_now():
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    assert dates.resolve_effective_date("garbage", "also garbage", now) == now
    assert dates.resolve_effective_date(None, "", now) == now


def test_week_index(since):
    assert dates.week_index(since, since) == 0
    assert dates.week_index(since + timedelta(days=6, hours=23), since) == 0
    assert dates.week_index(since + timedelta(days=7), since) == 1
    assert dates.week_index(since + timedelta(days=17), since) == 2


def test_week_index_before_since_clamps_to_zero(since):
    assert dates.week_index(since - timedelta(days=20), since) == 0


def test_total_weeks(since, today):
    assert dates.total_weeks(since, today) == 5
    assert dates.total_weeks(since, since) == 1
    assert dates.total_weeks(since, since + timedelta(days=6)) == 1
    assert dates.total_weeks(since, since + timedelta(days=7)) == 2


def test_days_active(since, today):
    assert dates.days_active(since, today) == 31
    assert dates.days_active(since, since) == 1


def test_week_end_clamped_to_today(since, today):
    start = dates.week_start(4, since)
    assert start == datetime(2025, 5, 13, tzinfo=timezone.utc)
    assert dates.week_end(start, today) == today
    assert dates.week_end(since, today) == since + timedelta(days=6)


def test_week_end_for_week_after_today(since, today):
    start = dates.week_start(6, since)
    assert dates.week_end(start, today) == start


def test_week_label_format():
    start = datetime(2025, 4, 29)
    end = datetime(2025, 5, 5)
    assert dates.week_label(2, start, end) == "Week  3 (Apr 29 - May 05)"
    assert dates.week_label(11, start, end).startswith("Week 12 (")


def test_parse_since():
    assert dates.parse_since("2025-04-15") == datetime(2025, 4, 15, tzinfo=timezone.utc)
    with pytest.raises(ValueError):
        dates.parse_since("04/15/2025")


def test_default_since():
    now = datetime(2025, 5, 15, 9, 30)
    assert dates.default_since(now) == "2025-04-15"


def test_default_since_uses_utc_clock(monkeypatch):
    # 23:30 UTC is already the next day east of UTC and still the same day far west of it
    monkeypatch.setattr(dates, "utcnow", lambda: datetime(2025, 5, 15, 23, 30, tzinfo=timezone.utc))
    assert dates.default_since() == "2025-04-15"
    assert dates.parse_relative_date("7d") == "2025-05-08"


@pytest.mark.parametrize(
    ("value", "delta"),
    [
        ("7d", timedelta(days=7)),
        ("2w", timedelta(weeks=2)),
        ("3m", timedelta(days=90)),
        ("1y", timedelta(days=365)),
    ],
)
def test_parse_relative_date(value, delta):
    now = datetime(2025, 5, 15)
    assert dates.parse_relative_date(value, now) == (now - delta).strftime("%Y-%m-%d")


def test_parse_relative_date_invalid():
    assert dates.parse_relative_date("abc") is None
    assert dates.parse_relative_date("10x") is None
    assert dates.parse_relative_date("") is None
    assert dates.parse_relative_date("2024-01-01") is None
