"""
Interview preparation endpoints: quiz results and history
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from career_insights.api.deps import get_context, get_generator, identity_http_error
from career_insights.context import RequestContext
from career_insights.exceptions import AssessmentNotFound, ProfileNotFound, Unauthorized
from career_insights.models.base import get_db
from career_insights.services.assessment_service import (
    AssessmentService,
    QuizAnswer,
    assessment_to_dict,
)
from career_insights.services.insight_generator import InsightGenerator

router = APIRouter(prefix="/interview", tags=["interview"])


class SaveQuizRequest(BaseModel):
    answers: List[QuizAnswer]
    category: str = "Technical"


@router.post("/assessments")
def save_quiz_result(
    body: SaveQuizRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
    generator: InsightGenerator = Depends(get_generator),
):
    """Score and store a completed quiz (may call the model for a tip)."""
    try:
        assessment = AssessmentService(db, generator).save_quiz_result(
            context, body.answers, category=body.category
        )
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)
    return assessment_to_dict(assessment)


@router.get("/assessments")
async def list_assessments(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
):
    try:
        assessments = AssessmentService(db).list_assessments(context)
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)
    return [assessment_to_dict(a) for a in assessments]


@router.get("/stats")
async def get_assessment_stats(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
):
    try:
        return AssessmentService(db).get_stats(context)
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)


@router.delete("/assessments/{assessment_id}")
async def delete_assessment(
    assessment_id: int,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
):
    try:
        AssessmentService(db).delete_assessment(context, assessment_id)
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)
    except AssessmentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
