"""
Assessment Service

Interview-prep quiz history: scoring and storing completed quizzes, listing
them for the dashboard, summary stats, and deleting a user's own attempts.
"""
from datetime import datetime
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from career_insights.context import RequestContext
from career_insights.exceptions import AssessmentNotFound
from career_insights.models.assessment import Assessment
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.profile_service import load_profile
from career_insights.utils.logger import log


class QuizAnswer(BaseModel):
    question: str
    answer: str
    user_answer: Optional[str] = None
    explanation: Optional[str] = None


def score_answers(answers: List[QuizAnswer]) -> float:
    """Percent of answers matching the expected answer (0 for an empty quiz)."""
    if not answers:
        return 0.0
    correct = sum(1 for a in answers if a.user_answer == a.answer)
    return correct / len(answers) * 100


def build_improvement_prompt(industry: Optional[str], wrong: List[QuizAnswer]) -> str:
    lines = "\n".join(
        f'Question: "{a.question}"\nCorrect Answer: "{a.answer}"\nUser Answer: "{a.user_answer or ""}"'
        for a in wrong
    )
    return f"""The user got the following {industry or "technical"} interview questions wrong:

{lines}

Based on these mistakes, provide a concise, specific improvement tip.
Focus on the knowledge gaps revealed by these wrong answers.
Keep the response under 2 sentences and make it encouraging.
Don't explicitly mention the mistakes, instead focus on what to learn/practice.
"""


def assessment_to_dict(a: Assessment) -> Dict:
    return {
        "id": a.id,
        "quiz_score": a.quiz_score,
        "category": a.category,
        "questions": a.questions or [],
        "improvement_tip": a.improvement_tip,
        "created_at": a.created_at.isoformat() if a.created_at else None,
    }


class AssessmentService:
    """Service for interview quiz results"""

    def __init__(
        self,
        db: Session,
        generator: Optional[InsightGenerator] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.db = db
        self.generator = generator
        self.clock = clock

    def save_quiz_result(
        self,
        context: RequestContext,
        answers: List[QuizAnswer],
        category: str = "Technical",
    ) -> Assessment:
        """
        Score a completed quiz and store it.

        When some answers are wrong and a model is configured, an improvement
        tip is generated; a failed tip call is logged and the quiz is still
        saved without one.
        """
        user = load_profile(self.db, context)
        score = score_answers(answers)

        wrong = [a for a in answers if a.user_answer != a.answer]
        tip = self._improvement_tip(user.industry, wrong) if wrong else None

        assessment = Assessment(
            user_id=user.id,
            quiz_score=score,
            category=category,
            questions=[
                {
                    "question": a.question,
                    "answer": a.answer,
                    "user_answer": a.user_answer,
                    "is_correct": a.user_answer == a.answer,
                    "explanation": a.explanation,
                }
                for a in answers
            ],
            improvement_tip=tip,
            created_at=self.clock(),
        )
        self.db.add(assessment)
        self.db.commit()
        self.db.refresh(assessment)

        log.info(f"Saved assessment {assessment.id} for user {context.user_id} ({score:.1f}%)")
        return assessment

    def list_assessments(self, context: RequestContext) -> List[Assessment]:
        """The acting user's assessments, oldest first."""
        user = load_profile(self.db, context)
        return (
            self.db.query(Assessment)
            .filter(Assessment.user_id == user.id)
            .order_by(Assessment.created_at.asc(), Assessment.id.asc())
            .all()
        )

    def get_stats(self, context: RequestContext) -> Dict:
        assessments = self.list_assessments(context)
        if not assessments:
            return {"total": 0, "average_score": 0.0, "latest_score": None, "questions_practiced": 0}

        return {
            "total": len(assessments),
            "average_score": sum(a.quiz_score for a in assessments) / len(assessments),
            "latest_score": assessments[-1].quiz_score,
            "questions_practiced": sum(len(a.questions or []) for a in assessments),
        }

    def delete_assessment(self, context: RequestContext, assessment_id: int) -> None:
        """
        Delete one of the acting user's assessments.

        Raises:
            AssessmentNotFound: no such id, or it belongs to someone else
        """
        user = load_profile(self.db, context)
        assessment = (
            self.db.query(Assessment)
            .filter(Assessment.id == assessment_id, Assessment.user_id == user.id)
            .first()
        )
        if assessment is None:
            raise AssessmentNotFound(assessment_id)

        self.db.delete(assessment)
        self.db.commit()
        log.info(f"Deleted assessment {assessment_id} for user {context.user_id}")

    def _improvement_tip(self, industry: Optional[str], wrong: List[QuizAnswer]) -> Optional[str]:
        if self.generator is None or not self.generator.is_available():
            return None
        try:
            return self.generator.complete(build_improvement_prompt(industry, wrong)).strip()
        except Exception as e:
            log.error(f"Error generating improvement tip: {str(e)}")
            return None
