"""Shared FastAPI dependencies."""
from fastapi import HTTPException, Request

from career_insights.context import RequestContext
from career_insights.exceptions import ProfileNotFound, Unauthorized
from career_insights.services.ats_service import AtsService
from career_insights.services.insight_generator import InsightGenerator


def get_context(request: Request) -> RequestContext:
    """Dependency: explicit identity context for service calls."""
    return RequestContext(user_id=getattr(request.state, "user_id", None))


def get_generator(request: Request) -> InsightGenerator:
    return request.app.state.generator


def get_ats_service(request: Request) -> AtsService:
    return request.app.state.ats_service


def identity_http_error(error: Exception) -> HTTPException:
    """Map identity errors to their HTTP status."""
    if isinstance(error, Unauthorized):
        return HTTPException(status_code=401, detail="Not authenticated")
    if isinstance(error, ProfileNotFound):
        return HTTPException(status_code=404, detail="User not found")
    return HTTPException(status_code=500, detail=str(error))
