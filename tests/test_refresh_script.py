"""Operator refresh script: due-record listing."""
import importlib.util
from datetime import datetime, timedelta
from pathlib import Path

from career_insights.models import IndustryInsight, User

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "refresh_insights.py"
NOW = datetime(2026, 10, 18)


def _load_script():
    module_spec = importlib.util.spec_from_file_location("refresh_insights", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def _add(db, external_id, industry, last_updated):
    user = User(external_user_id=external_id, industry=industry, skills=[])
    db.add(user)
    db.flush()
    db.add(IndustryInsight(
        user_id=user.id, industry=industry, salary_ranges=[], growth_rate=0.0,
        demand_level="Low", market_outlook="Neutral", top_skills=[], key_trends=[],
        recommended_skills=[], last_updated=last_updated,
        next_update=last_updated + timedelta(days=7), revision=1,
    ))
    db.commit()


def test_list_due_only_returns_elapsed_records(db):
    _add(db, "due", "tech", NOW - timedelta(days=8))
    _add(db, "fresh", "finance", NOW - timedelta(days=1))

    due = _load_script().list_due(db, NOW)

    assert [d["industry"] for d in due] == ["tech"]
    assert due[0]["next_update"] == (NOW - timedelta(days=1)).isoformat()


def test_list_due_respects_batch_limit(db):
    for i in range(3):
        _add(db, f"due_{i}", f"industry_{i}", NOW - timedelta(days=8 + i))

    script = _load_script()

    assert len(script.list_due(db, NOW, limit=2)) == 2
    assert len(script.list_due(db, NOW, limit=0)) == 3
