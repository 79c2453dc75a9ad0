"""
ATS analysis endpoint
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from career_insights.api.deps import get_ats_service
from career_insights.exceptions import AtsScoringError
from career_insights.services.ats_service import AtsService

router = APIRouter(prefix="/ats", tags=["ats"])


class AnalyzeRequest(BaseModel):
    resume_text: Optional[str] = None
    job_description: str = ""


@router.post("/analyze")
def analyze_resume(body: AnalyzeRequest, service: AtsService = Depends(get_ats_service)):
    """
    Score a resume against a job description.

    Returns {"JD Match", "MissingKeywords", "Profile Summary"}.
    """
    if not body.resume_text or not body.resume_text.strip():
        return JSONResponse(status_code=400, content={"error": "No resume text provided"})

    try:
        return service.analyze(body.resume_text, body.job_description)
    except AtsScoringError as e:
        return JSONResponse(status_code=500, content={"error": str(e)})
