"""
Scheduled job endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from career_insights.api.deps import get_generator
from career_insights.models.base import get_db
from career_insights.scheduler import get_scheduled_jobs
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.insight_refresh_service import InsightRefreshService
from career_insights.utils.logger import log

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("")
async def list_jobs():
    """List scheduled jobs and their next run times"""
    return {"jobs": get_scheduled_jobs()}


@router.post("/insight-refresh")
def trigger_insight_refresh(
    db: Session = Depends(get_db),
    generator: InsightGenerator = Depends(get_generator),
):
    """Run the industry insight refresh now instead of waiting for the schedule"""
    try:
        log.info("Manually triggering industry insight refresh...")
        return InsightRefreshService(db, generator).refresh_outdated()
    except Exception as e:
        log.error(f"Error triggering insight refresh: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
