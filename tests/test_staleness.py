"""
Staleness policy tests.

These are unit tests that do NOT require a database: records are plain
namespaces with `industry` and `last_updated`.
"""
from datetime import datetime, timedelta
from types import SimpleNamespace

from career_insights.services.staleness import (
    RefreshReason,
    StalenessDecision,
    age_in_days,
    needs_refresh,
)

NOW = datetime(2026, 10, 18, 12, 0, 0)


def _record(industry="tech", age=timedelta(0)):
    return SimpleNamespace(industry=industry, last_updated=NOW - age)


def test_no_record_needs_refresh():
    assert needs_refresh("tech", None, NOW) == StalenessDecision(True, RefreshReason.NO_RECORD)


def test_no_industry_never_refreshes():
    assert needs_refresh(None, None, NOW) == StalenessDecision(False, RefreshReason.NO_INDUSTRY)
    assert needs_refresh("", _record(), NOW).refresh is False


def test_blank_industry_never_refreshes():
    assert needs_refresh("   ", None, NOW) == StalenessDecision(False, RefreshReason.NO_INDUSTRY)
    assert needs_refresh("\t", _record(), NOW).refresh is False


def test_industry_change_wins_over_recent_update():
    record = _record("finance", age=timedelta(minutes=1))
    decision = needs_refresh("tech", record, NOW)
    assert decision == StalenessDecision(True, RefreshReason.INDUSTRY_CHANGED)


def test_industry_change_wins_over_expiry():
    record = _record("finance", age=timedelta(days=30))
    assert needs_refresh("tech", record, NOW).reason == RefreshReason.INDUSTRY_CHANGED


def test_six_days_twenty_three_hours_is_fresh():
    record = _record(age=timedelta(days=6, hours=23))
    assert needs_refresh("tech", record, NOW) == StalenessDecision(False, RefreshReason.FRESH_ENOUGH)


def test_seven_days_is_expired():
    record = _record(age=timedelta(days=7))
    assert needs_refresh("tech", record, NOW) == StalenessDecision(True, RefreshReason.EXPIRED)


def test_age_is_whole_days():
    assert age_in_days(NOW - timedelta(days=6, hours=23, minutes=59), NOW) == 6
    assert age_in_days(NOW - timedelta(days=7, seconds=1), NOW) == 7


def test_future_last_updated_is_fresh():
    record = _record(age=-timedelta(hours=2))
    assert needs_refresh("tech", record, NOW).reason == RefreshReason.FRESH_ENOUGH


def test_missing_last_updated_is_expired():
    record = SimpleNamespace(industry="tech", last_updated=None)
    assert needs_refresh("tech", record, NOW).reason == RefreshReason.EXPIRED


def test_idempotent():
    record = _record(age=timedelta(days=3))
    first = needs_refresh("tech", record, NOW)
    second = needs_refresh("tech", record, NOW)
    assert first == second
    assert record.last_updated == NOW - timedelta(days=3)
