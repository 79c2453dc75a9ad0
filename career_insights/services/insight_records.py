"""
Helpers for writing and presenting IndustryInsight rows
"""
from datetime import datetime, timedelta
from typing import Dict, Optional

from career_insights.models.industry_insight import IndustryInsight
from career_insights.services.insight_generator import (
    InsightData,
    LOAD_ERROR_SENTINEL,
    PLACEHOLDER_SENTINEL,
    fallback_insight,
    is_fallback,
)

REFRESH_INTERVAL = timedelta(days=7)


def apply_insight(
    record: IndustryInsight,
    data: InsightData,
    now: datetime,
    industry: Optional[str] = None,
) -> IndustryInsight:
    """
    Overwrite the generated fields of `record` and restamp it.

    `industry` is only passed on the per-user paths; the refresh job keeps
    the stored value.
    """
    for column, value in data.to_columns().items():
        setattr(record, column, value)
    if industry is not None:
        record.industry = industry
    record.last_updated = now
    record.next_update = now + REFRESH_INTERVAL
    record.revision = (record.revision or 0) + 1
    return record


def new_insight(user_id: int, industry: str, data: InsightData, now: datetime) -> IndustryInsight:
    record = IndustryInsight(user_id=user_id, industry=industry, revision=0)
    return apply_insight(record, data, now)


def insight_to_dict(record: IndustryInsight) -> Dict:
    """JSON-ready representation of a stored insight."""
    return {
        "id": record.id,
        "industry": record.industry,
        "salary_ranges": record.salary_ranges,
        "growth_rate": record.growth_rate,
        "demand_level": record.demand_level,
        "market_outlook": record.market_outlook,
        "top_skills": record.top_skills,
        "key_trends": record.key_trends,
        "recommended_skills": record.recommended_skills,
        "last_updated": record.last_updated.isoformat() if record.last_updated else None,
        "next_update": record.next_update.isoformat() if record.next_update else None,
        "degraded": is_fallback(record.top_skills, record.key_trends),
    }


def placeholder_insight(kind: str, now: Optional[datetime] = None) -> Dict:
    """
    Unpersisted stand-in returned by read paths.

    kind: "default" for profiles without an industry, "error" when loading failed
    """
    now = now or datetime.utcnow()
    sentinel = PLACEHOLDER_SENTINEL if kind == "default" else LOAD_ERROR_SENTINEL
    data = fallback_insight(sentinel)
    return {
        "id": kind,
        "industry": kind,
        **data.to_columns(),
        "last_updated": now.isoformat(),
        "next_update": (now + REFRESH_INTERVAL).isoformat(),
        "degraded": True,
    }
