"""Tests for time token parsing and range resolution."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from datetime import timedelta

import pendulum

from logsearch_guard import ResolvedTimeRange, parse_time_token, resolve_time_range

NOW = pendulum.datetime(2025, 1, 15, 12, 0, 0, tz="UTC")


# ── Token parsing ────────────────────────────────────────────────────

def test_now_token_is_case_insensitive():
    assert parse_time_token("now", NOW) == NOW
    assert parse_time_token("NoW", NOW) == NOW


def test_relative_units():
    assert parse_time_token("-30s", NOW) == NOW.subtract(seconds=30)
    assert parse_time_token("-15m", NOW) == NOW.subtract(minutes=15)
    assert parse_time_token("-2H", NOW) == NOW.subtract(hours=2)
    assert parse_time_token("-3d", NOW) == NOW.subtract(days=3)
    assert parse_time_token("-1w", NOW) == NOW.subtract(weeks=1)


def test_absolute_timestamp_keeps_its_offset():
    parsed = parse_time_token("2025-01-10T08:00:00+05:00", NOW)
    assert parsed == pendulum.datetime(2025, 1, 10, 3, 0, 0, tz="UTC")
    assert parsed.utcoffset() == timedelta(hours=5)


def test_naive_timestamp_uses_clock_timezone():
    now = pendulum.datetime(2025, 1, 15, 12, tz="Europe/Paris")
    parsed = parse_time_token("2025-01-10T08:00:00", now)
    assert parsed == pendulum.datetime(2025, 1, 10, 8, tz="Europe/Paris")


def test_invalid_tokens_resolve_to_none():
    assert parse_time_token(None, NOW) is None
    assert parse_time_token("", NOW) is None
    assert parse_time_token("definitely-not-a-date", NOW) is None


def test_duration_is_not_a_point_in_time():
    assert parse_time_token("P1D", NOW) is None


def test_huge_offset_does_not_raise():
    assert parse_time_token("-9999999d", NOW) is None


# ── Range resolution ─────────────────────────────────────────────────

def test_relative_from_runs_to_now():
    r = resolve_time_range("-15m", now=NOW)
    assert r.to == NOW
    assert r.from_ == NOW.subtract(minutes=15)


def test_backwards_range_is_swapped():
    r = resolve_time_range("2025-01-10T00:00:00Z", "2025-01-01T00:00:00Z", now=NOW)
    assert r.from_ < r.to
    assert r.from_ == pendulum.datetime(2025, 1, 1, tz="UTC")
    assert r.to == pendulum.datetime(2025, 1, 10, tz="UTC")


def test_relative_to_alone_is_a_window_ending_now():
    r = resolve_time_range(to="-2h", now=NOW)
    assert r.to == NOW
    assert r.from_ == NOW.subtract(hours=2)


def test_nothing_supplied():
    r = resolve_time_range(now=NOW)
    assert r == ResolvedTimeRange(from_=None, to=None)


def test_explicit_from_and_to():
    r = resolve_time_range("-1d", "now", now=NOW)
    assert r.from_ == NOW.subtract(days=1)
    assert r.to == NOW


def test_window_rule_skipped_when_from_supplied():
    # An unparseable `from` still counts as supplied
    r = resolve_time_range("garbage-token-here", "-2h", now=NOW)
    assert r.from_ is None
    assert r.to == NOW.subtract(hours=2)


def test_absolute_to_alone_is_left_as_is():
    r = resolve_time_range(to="2025-01-01T00:00:00Z", now=NOW)
    assert r.from_ is None
    assert r.to == pendulum.datetime(2025, 1, 1, tz="UTC")


def test_unparseable_from_without_to():
    r = resolve_time_range("garbage-token-here", now=NOW)
    assert r == ResolvedTimeRange()


def test_naive_clock_is_treated_as_utc():
    naive = pendulum.naive(2025, 1, 15, 12)
    r = resolve_time_range("2025-01-10T00:00:00Z", "-1h", now=naive)
    assert r.from_ == pendulum.datetime(2025, 1, 10, tz="UTC")
    assert r.to == pendulum.datetime(2025, 1, 15, 11, tz="UTC")


def test_default_clock_is_whole_seconds():
    r = resolve_time_range("-15m")
    assert r.to.microsecond == 0
    assert r.from_ == r.to.subtract(minutes=15)


def test_as_dict_renders_iso8601():
    r = resolve_time_range("-1h", now=NOW)
    assert r.as_dict() == {
        "from": "2025-01-15T11:00:00+00:00",
        "to": "2025-01-15T12:00:00+00:00",
    }
    assert ResolvedTimeRange().as_dict() == {"from": None, "to": None}


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
