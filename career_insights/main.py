"""
Career Insights Service
Main FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from career_insights.config import get_settings
from career_insights.utils.logger import log
from career_insights import __version__

from career_insights.api import health, users, insights, interview, jobs, ats
from career_insights.middleware.identity_middleware import IdentityMiddleware
from career_insights.services.ats_service import AtsService
from career_insights.services.insight_generator import InsightGenerator

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    log.info(f"Starting {settings.app_name} v{__version__}")
    log.info(f"Environment: {settings.environment}")

    # Initialize database
    try:
        from career_insights.models.base import init_db
        init_db()
        log.info("Database initialized")
    except Exception as e:
        log.error(f"Database initialization error: {str(e)}")

    # One LLM client for the whole process, shared by both services
    generator = InsightGenerator.from_settings(settings)
    app.state.generator = generator
    app.state.ats_service = AtsService.from_client(generator.client, settings)

    # Start the scheduler for the weekly insight refresh
    if settings.enable_scheduler:
        try:
            from career_insights.scheduler import start_scheduler
            start_scheduler(generator)
            log.info("Scheduler started successfully")
        except Exception as e:
            log.error(f"Scheduler startup error: {str(e)}")

    yield

    # Shutdown
    from career_insights.scheduler import stop_scheduler
    stop_scheduler()
    generator.close()
    log.info("Shutting down application")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="""
    AI-assisted career platform back end

    - Industry insights (salary ranges, demand, trends, skills) generated with Claude
    - Profile updates reconciled with their industry insight in one transaction
    - Weekly refresh of outdated insights
    - Interview quiz results, history and stats
    - Resume / job description ATS match scoring
    """,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Verified identity from the upstream identity provider
app.add_middleware(IdentityMiddleware)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(users.router)
app.include_router(insights.router)
app.include_router(interview.router)
app.include_router(jobs.router)
app.include_router(ats.router)


@app.get("/")
async def root():
    """API index"""
    return {
        "name": settings.app_name,
        "version": __version__,
        "endpoints": {
            "health": "GET /health",
            "status": "GET /status",
            "register": "POST /users/register",
            "profile": "GET /users/me",
            "update_profile": "PUT /users/me",
            "onboarding": "GET /users/me/onboarding",
            "insights": "GET /insights",
            "assessments": "GET|POST /interview/assessments",
            "delete_assessment": "DELETE /interview/assessments/{id}",
            "assessment_stats": "GET /interview/stats",
            "jobs": "GET /jobs",
            "refresh_insights": "POST /jobs/insight-refresh",
            "ats_analyze": "POST /ats/analyze"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "career_insights.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        workers=settings.api_workers if not settings.debug else 1
    )
