"""
Health check and status endpoints
"""
from fastapi import APIRouter, Request
from datetime import datetime
from career_insights.config import get_settings
from career_insights import __version__

settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__
    }


@router.get("/status")
async def get_status(request: Request):
    """Get system status"""
    generator = getattr(request.app.state, "generator", None)
    return {
        "app_name": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "features": {
            "llm": bool(generator and generator.is_available()),
            "insight_refresh_schedule": settings.insight_refresh_schedule,
            "scheduler": settings.enable_scheduler
        },
        "timestamp": datetime.utcnow().isoformat()
    }
