"""User profile model"""
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from career_insights.models.base import Base


class User(Base):
    """
    Career profile for one identity-provider user.

    `industry` may encode a main/sub pair as "main-sub-words"; see
    career_insights.utils.industry for the boundary format.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    external_user_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=True)
    name = Column(String, nullable=True)

    industry = Column(String, nullable=True)
    experience = Column(Integer, nullable=True)  # Years
    bio = Column(Text, nullable=True)
    skills = Column(JSON, nullable=True)  # List of strings

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    industry_insight = relationship(
        "IndustryInsight",
        back_populates="user",
        uselist=False,
    )

    assessments = relationship(
        "Assessment",
        back_populates="user",
        order_by="Assessment.created_at",
        cascade="all, delete-orphan",
    )
