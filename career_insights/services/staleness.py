"""
Staleness policy for industry insights.

Pure decision logic: no database or network access, so it can be called
(and tested) with plain objects.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

REFRESH_AFTER_DAYS = 7


class RefreshReason(str, Enum):
    NO_INDUSTRY = "no_industry"
    NO_RECORD = "no_record"
    INDUSTRY_CHANGED = "industry_changed"
    EXPIRED = "expired"
    FRESH_ENOUGH = "fresh_enough"


@dataclass(frozen=True)
class StalenessDecision:
    refresh: bool
    reason: RefreshReason


def age_in_days(last_updated: datetime, now: datetime) -> int:
    """Whole days elapsed, rounded down."""
    return (now - last_updated).days


def needs_refresh(industry: Optional[str], record, now: Optional[datetime] = None) -> StalenessDecision:
    """
    Decide whether the insight for `industry` must be regenerated.

    Args:
        industry: The profile's effective industry
        record: Existing insight (anything with `industry` and `last_updated`), or None
        now: Reference time, defaults to utcnow

    An industry mismatch wins over age; an insight is expired once it is at
    least REFRESH_AFTER_DAYS whole days old.
    """
    if not industry or not industry.strip():
        return StalenessDecision(False, RefreshReason.NO_INDUSTRY)

    if record is None:
        return StalenessDecision(True, RefreshReason.NO_RECORD)

    if record.industry != industry:
        return StalenessDecision(True, RefreshReason.INDUSTRY_CHANGED)

    if record.last_updated is None:
        return StalenessDecision(True, RefreshReason.EXPIRED)

    now = now or datetime.utcnow()
    if age_in_days(record.last_updated, now) >= REFRESH_AFTER_DAYS:
        return StalenessDecision(True, RefreshReason.EXPIRED)

    return StalenessDecision(False, RefreshReason.FRESH_ENOUGH)
