"""
Industry Insight Models

One generated market snapshot per user profile, refreshed weekly.
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship

from career_insights.models.base import Base


# Allowed values for the enum-like columns
DEMAND_LEVELS = ("High", "Medium", "Low", "Unknown")
MARKET_OUTLOOKS = ("Positive", "Neutral", "Negative", "Unknown")


class IndustryInsight(Base):
    """
    Generated insight for the industry a user declared

    next_update is always last_updated + 7 days; both are written together
    by career_insights.services.insight_records.apply_insight.
    """
    __tablename__ = "industry_insights"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    industry = Column(String, index=True, nullable=False)

    salary_ranges = Column(JSON, nullable=False)
    """
    [
        {"role": "Data Engineer", "min": 90000, "max": 160000,
         "median": 120000, "location": "US"}
    ]
    """
    growth_rate = Column(Float, default=0.0)  # Percent
    demand_level = Column(String, default="Unknown")
    market_outlook = Column(String, default="Unknown")

    top_skills = Column(JSON, nullable=False)
    key_trends = Column(JSON, nullable=False)
    recommended_skills = Column(JSON, nullable=False)

    last_updated = Column(DateTime, nullable=False)
    next_update = Column(DateTime, index=True, nullable=False)

    # Bumped on every write. Informational only: concurrent writers are
    # last-write-wins.
    revision = Column(Integer, default=1, nullable=False)

    user = relationship("User", back_populates="industry_insight")
