"""
Insight Generator

Asks the LLM for a structured market snapshot of one industry and turns the
reply into an InsightData record. Failures never escape generate(): callers
get a clearly marked fallback record instead.
"""
import json
import re
from typing import List, Optional

from anthropic import Anthropic
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from career_insights.config import Settings, get_settings
from career_insights.exceptions import InsightParseError
from career_insights.models.industry_insight import DEMAND_LEVELS, MARKET_OUTLOOKS
from career_insights.utils.logger import log


# Sentinel text written into fallback records. Anything showing one of these
# is degraded data, not a real market snapshot.
EMPTY_INDUSTRY_SENTINEL = "No industry specified"
ERROR_SENTINEL = "Error occurred"
PLACEHOLDER_SENTINEL = "Please set your industry"
LOAD_ERROR_SENTINEL = "Error loading data"

FALLBACK_SENTINELS = (
    EMPTY_INDUSTRY_SENTINEL,
    ERROR_SENTINEL,
    PLACEHOLDER_SENTINEL,
    LOAD_ERROR_SENTINEL,
)

_OPENING_FENCE = re.compile(r"\A```[\w+-]*[ \t]*(?:\r?\n)?")
_CLOSING_FENCE = re.compile(r"(?:\r?\n)?```\s*\Z")


class SalaryRange(BaseModel):
    role: str
    min: float
    max: float
    median: float
    location: str


def _normalize_choice(value, choices) -> str:
    if not isinstance(value, str):
        return "Unknown"
    for choice in choices:
        if value.strip().lower() == choice.lower():
            return choice
    return "Unknown"


class InsightData(BaseModel):
    """Generated fields of an industry insight (wire names are camelCase)."""

    model_config = ConfigDict(populate_by_name=True)

    salary_ranges: List[SalaryRange] = Field(alias="salaryRanges")
    growth_rate: float = Field(alias="growthRate")
    demand_level: str = Field(alias="demandLevel")
    top_skills: List[str] = Field(alias="topSkills")
    market_outlook: str = Field(alias="marketOutlook")
    key_trends: List[str] = Field(alias="keyTrends")
    recommended_skills: List[str] = Field(alias="recommendedSkills")

    @field_validator("growth_rate", mode="before")
    @classmethod
    def _strip_percent(cls, value):
        # Models sometimes answer "12.5%" despite being asked for a number
        if isinstance(value, str):
            return value.strip().rstrip("%").strip()
        return value

    @field_validator("demand_level", mode="before")
    @classmethod
    def _demand_level(cls, value):
        return _normalize_choice(value, DEMAND_LEVELS)

    @field_validator("market_outlook", mode="before")
    @classmethod
    def _market_outlook(cls, value):
        return _normalize_choice(value, MARKET_OUTLOOKS)

    def to_columns(self) -> dict:
        """Column values for IndustryInsight."""
        return {
            "salary_ranges": [s.model_dump() for s in self.salary_ranges],
            "growth_rate": self.growth_rate,
            "demand_level": self.demand_level,
            "top_skills": list(self.top_skills),
            "market_outlook": self.market_outlook,
            "key_trends": list(self.key_trends),
            "recommended_skills": list(self.recommended_skills),
        }


def fallback_insight(
    sentinel: str,
    salary_role: Optional[str] = None,
    salary: tuple = (0, 0, 0),
    location: str = "N/A",
) -> InsightData:
    """Build a fallback record marked with `sentinel`."""
    low, high, median = salary
    return InsightData(
        salary_ranges=[SalaryRange(
            role=salary_role or sentinel, min=low, max=high, median=median, location=location
        )],
        growth_rate=0,
        demand_level="Medium",
        top_skills=[sentinel],
        market_outlook="Neutral",
        key_trends=[sentinel],
        recommended_skills=[sentinel],
    )


def empty_industry_fallback() -> InsightData:
    return fallback_insight(
        EMPTY_INDUSTRY_SENTINEL,
        salary_role="Example Role",
        salary=(50000, 100000, 75000),
        location="General",
    )


def error_fallback() -> InsightData:
    return fallback_insight(ERROR_SENTINEL)


def is_fallback(top_skills, key_trends=None) -> bool:
    """True when the skill or trend lists carry a fallback sentinel."""
    values = list(top_skills or []) + list(key_trends or [])
    return any(v in FALLBACK_SENTINELS for v in values)


def build_insight_prompt(industry: str) -> str:
    """Prompt asking for a strict-JSON snapshot of `industry`."""
    return f"""Analyze the current state of the {industry} industry and provide insights in ONLY the following JSON format without any additional notes or explanations:
{{
  "salaryRanges": [
    {{ "role": "string", "min": number, "max": number, "median": number, "location": "string" }}
  ],
  "growthRate": number,
  "demandLevel": "High" | "Medium" | "Low",
  "topSkills": ["skill1", "skill2"],
  "marketOutlook": "Positive" | "Neutral" | "Negative",
  "keyTrends": ["trend1", "trend2"],
  "recommendedSkills": ["skill1", "skill2"]
}}

IMPORTANT: Return ONLY the JSON. No additional text, notes, or markdown formatting.
Include at least 5 common roles for salary ranges.
Growth rate should be a percentage.
Include at least 5 top skills, 5 key trends and 5 recommended skills.
"""


def strip_code_fences(text: str) -> str:
    """Remove a wrapping ``` / ```json fence and surrounding whitespace."""
    text = text.strip()
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_insight_text(text: str) -> InsightData:
    """
    Parse a raw model reply into InsightData.

    Raises:
        InsightParseError: reply is not JSON or lacks required fields
    """
    cleaned = strip_code_fences(text or "")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise InsightParseError(f"Reply is not valid JSON: {e}", raw_text=text) from e

    if not isinstance(payload, dict):
        raise InsightParseError("Reply JSON is not an object", raw_text=text)

    try:
        return InsightData.model_validate(payload)
    except ValidationError as e:
        raise InsightParseError(
            f"Reply is missing or has invalid fields ({e.error_count()} errors)",
            raw_text=text,
        ) from e


class InsightGenerator:
    """
    Generates industry insights with Claude
    """

    def __init__(
        self,
        client: Optional[Anthropic],
        model: str,
        max_tokens: int = 2000,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InsightGenerator":
        settings = settings or get_settings()
        client = None
        if settings.anthropic_api_key:
            client = Anthropic(api_key=settings.anthropic_api_key)
            log.info(f"Insight generator initialized with {settings.llm_model}")
        else:
            log.warning("ANTHROPIC_API_KEY not set; insight generation will return fallbacks")
        return cls(
            client,
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds,
        )

    def is_available(self) -> bool:
        """Check if the LLM client is configured"""
        return self.client is not None

    def close(self):
        if self.client is not None:
            self.client.close()

    def complete(self, prompt: str, timeout: Optional[float] = None) -> str:
        """
        Send one prompt and return the reply text. Raises on transport errors.
        """
        if self.client is None:
            raise RuntimeError("LLM client is not configured. Set ANTHROPIC_API_KEY.")

        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
            timeout=timeout if timeout is not None else self.timeout,
        )
        return response.content[0].text

    def generate(self, industry: Optional[str], timeout: Optional[float] = None) -> InsightData:
        """
        Generate insights for `industry`.

        Never raises: an empty industry yields the empty-industry fallback
        (no model call), any call or parse failure yields the error fallback.
        """
        if not industry or not industry.strip():
            log.error("Industry is required for generating insights")
            return empty_industry_fallback()

        try:
            text = self.complete(build_insight_prompt(industry), timeout=timeout)
            data = parse_insight_text(text)
            log.info(f"Generated insights for industry '{industry}'")
            return data
        except Exception as e:
            log.error(f"Error generating insights for '{industry}': {str(e)}")
            return error_fallback()
