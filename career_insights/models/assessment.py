"""
Interview Assessment Models

One row per completed interview-prep quiz.
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from career_insights.models.base import Base


class Assessment(Base):
    """Scored quiz attempt owned by one user profile"""
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    quiz_score = Column(Float, nullable=False)  # Percent correct, 0-100
    category = Column(String, default="Technical", nullable=False)

    questions = Column(JSON, nullable=False)
    """
    [
        {"question": "...", "answer": "...", "user_answer": "...",
         "is_correct": false, "explanation": "..."}
    ]
    """
    improvement_tip = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), index=True)

    user = relationship("User", back_populates="assessments")
