"""Database models for the Career Insights service"""

from career_insights.models.user import User

from career_insights.models.industry_insight import (
    IndustryInsight,
    DEMAND_LEVELS,
    MARKET_OUTLOOKS
)

from career_insights.models.assessment import Assessment
