"""Pytest configuration and fixtures."""
import json
import os
from types import SimpleNamespace

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("ENABLE_SCHEDULER", "false")
os.environ.setdefault("ANTHROPIC_API_KEY", "")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from career_insights.models.base import init_db  # noqa: E402
from career_insights.services.insight_generator import InsightGenerator  # noqa: E402


def make_insight_payload(tag: str = "Tech") -> dict:
    return {
        "salaryRanges": [
            {"role": f"{tag} Role {i}", "min": 50000 + i, "max": 150000 + i,
             "median": 100000 + i, "location": "Remote"}
            for i in range(5)
        ],
        "growthRate": 8.5,
        "demandLevel": "High",
        "topSkills": [f"{tag} skill {i}" for i in range(5)],
        "marketOutlook": "Positive",
        "keyTrends": [f"{tag} trend {i}" for i in range(5)],
        "recommendedSkills": [f"{tag} rec {i}" for i in range(5)],
    }


def make_insight_reply(tag: str = "Tech", fenced: bool = True) -> str:
    body = json.dumps(make_insight_payload(tag), indent=2)
    return f"```json\n{body}\n```" if fenced else body


class FakeMessages:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if not self.replies:
            raise AssertionError("unexpected LLM call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=reply)])


class FakeLLMClient:
    """Stands in for anthropic.Anthropic: replies are returned in order."""

    def __init__(self, *replies):
        self.messages = FakeMessages(replies)
        self.closed = False

    @property
    def calls(self):
        return self.messages.calls

    def close(self):
        self.closed = True


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_generator():
    def _make(*replies) -> InsightGenerator:
        return InsightGenerator(FakeLLMClient(*replies), model="test-model", max_tokens=500)
    return _make
