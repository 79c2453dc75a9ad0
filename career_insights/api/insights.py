"""
Industry insight endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from career_insights.api.deps import get_context, get_generator, identity_http_error
from career_insights.context import RequestContext
from career_insights.exceptions import ProfileNotFound, Unauthorized
from career_insights.models.base import get_db
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.insight_service import InsightService

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("")
def get_industry_insights(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
    generator: InsightGenerator = Depends(get_generator),
):
    """
    Industry insight for the signed-in user.

    `degraded: true` marks placeholder or fallback data that should be shown
    as an empty state rather than real figures.
    """
    try:
        return InsightService(db, generator).get_industry_insights(context)
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)
