"""Dashboard insight read-path tests."""
from datetime import datetime, timedelta

import pytest

from career_insights.context import RequestContext
from career_insights.exceptions import ProfileNotFound, Unauthorized
from career_insights.models import IndustryInsight, User
from career_insights.services.insight_generator import LOAD_ERROR_SENTINEL, PLACEHOLDER_SENTINEL
from career_insights.services.insight_service import InsightService
from tests.conftest import make_insight_reply

NOW = datetime(2026, 10, 18, 8, 0, 0)
CTX = RequestContext(user_id="user_dash")


def _add_user(db, industry=None):
    user = User(external_user_id=CTX.user_id, industry=industry, skills=[])
    db.add(user)
    db.commit()
    return user


def _add_insight(db, user, industry, age):
    db.add(IndustryInsight(
        user_id=user.id, industry=industry, salary_ranges=[], growth_rate=2.0,
        demand_level="Medium", market_outlook="Neutral", top_skills=["Stored"],
        key_trends=["Stored trend"], recommended_skills=[], last_updated=NOW - age,
        next_update=NOW - age + timedelta(days=7), revision=1,
    ))
    db.commit()


def test_identity_errors_propagate(db, make_generator):
    service = InsightService(db, make_generator(), clock=lambda: NOW)
    with pytest.raises(Unauthorized):
        service.get_industry_insights(RequestContext())
    with pytest.raises(ProfileNotFound):
        service.get_industry_insights(CTX)


def test_no_industry_returns_unpersisted_placeholder(db, make_generator):
    _add_user(db)
    generator = make_generator()

    insight = InsightService(db, generator, clock=lambda: NOW).get_industry_insights(CTX)

    assert insight["id"] == "default"
    assert insight["top_skills"] == [PLACEHOLDER_SENTINEL]
    assert insight["degraded"] is True
    assert generator.client.calls == []
    assert db.query(IndustryInsight).count() == 0


def test_creates_insight_when_missing(db, make_generator):
    _add_user(db, industry="healthcare")

    insight = InsightService(db, make_generator(make_insight_reply()), clock=lambda: NOW).get_industry_insights(CTX)

    assert insight["industry"] == "healthcare"
    assert insight["degraded"] is False
    assert insight["last_updated"] == NOW.isoformat()
    assert insight["next_update"] == (NOW + timedelta(days=7)).isoformat()
    assert db.query(IndustryInsight).count() == 1


def test_fresh_insight_is_returned_as_is(db, make_generator):
    user = _add_user(db, industry="tech")
    _add_insight(db, user, "tech", timedelta(days=1))
    generator = make_generator()

    insight = InsightService(db, generator, clock=lambda: NOW).get_industry_insights(CTX)

    assert insight["top_skills"] == ["Stored"]
    assert generator.client.calls == []


def test_industry_mismatch_is_repaired(db, make_generator):
    user = _add_user(db, industry="tech")
    _add_insight(db, user, "finance", timedelta(hours=1))

    insight = InsightService(db, make_generator(make_insight_reply()), clock=lambda: NOW).get_industry_insights(CTX)

    assert insight["industry"] == "tech"
    assert insight["top_skills"][0] == "Tech skill 0"


def test_expired_insight_is_regenerated(db, make_generator):
    user = _add_user(db, industry="tech")
    _add_insight(db, user, "tech", timedelta(days=7))

    insight = InsightService(db, make_generator(make_insight_reply()), clock=lambda: NOW).get_industry_insights(CTX)

    assert insight["last_updated"] == NOW.isoformat()


def test_storage_failure_degrades_to_error_placeholder(db, make_generator, monkeypatch):
    _add_user(db, industry="tech")

    def failing_commit():
        raise RuntimeError("disk I/O error")

    monkeypatch.setattr(db, "commit", failing_commit)

    insight = InsightService(db, make_generator(make_insight_reply()), clock=lambda: NOW).get_industry_insights(CTX)

    assert insight["id"] == "error"
    assert insight["top_skills"] == [LOAD_ERROR_SENTINEL]
    assert insight["degraded"] is True
