"""
Scheduler for the weekly insight refresh

Uses APScheduler to run InsightRefreshService on a cron trigger.
"""
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
import asyncio
import time
from typing import Dict

from career_insights.config import get_settings
from career_insights.models.base import SessionLocal
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.insight_refresh_service import InsightRefreshService
from career_insights.utils.logger import log

settings = get_settings()
scheduler = AsyncIOScheduler()

INSIGHT_REFRESH_JOB_ID = "insight_refresh"


def run_insight_refresh(generator: InsightGenerator, session_factory=SessionLocal) -> Dict:
    """Run one refresh sweep with its own session."""
    db = session_factory()
    try:
        return InsightRefreshService(db, generator).refresh_outdated()
    finally:
        db.close()


async def refresh_industry_insights(generator: InsightGenerator):
    """Weekly insight refresh (Sundays at midnight by default)"""
    start = time.time()
    try:
        with log.contextualize(job=INSIGHT_REFRESH_JOB_ID):
            log.info("Starting industry insight refresh...")
            result = await asyncio.to_thread(run_insight_refresh, generator)
        log.info(
            f"Industry insight refresh {result['status']}: "
            f"{result['updated']}/{result['total']} updated in {time.time() - start:.1f}s"
        )
        return result

    except Exception as e:
        log.error(f"Industry insight refresh error: {str(e)}")


def setup_scheduler(generator: InsightGenerator):
    """
    Register scheduled jobs.

    - Insight refresh: insight_refresh_schedule (crontab), default Sunday 00:00
    """
    scheduler.add_job(
        refresh_industry_insights,
        trigger=CronTrigger.from_crontab(
            settings.insight_refresh_schedule,
            timezone=settings.insight_refresh_timezone,
        ),
        kwargs={"generator": generator},
        id=INSIGHT_REFRESH_JOB_ID,
        name='Generate Industry Insights',
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )


def start_scheduler(generator: InsightGenerator):
    """Start the scheduler"""
    setup_scheduler(generator)
    scheduler.start()
    log.info("Scheduler started")


def stop_scheduler():
    """Stop the scheduler"""
    if scheduler.running:
        scheduler.shutdown()
        log.info("Scheduler stopped")


def get_scheduled_jobs() -> list:
    """
    Get list of all scheduled jobs

    Returns:
        List of job info dicts
    """
    jobs = []

    for job in scheduler.get_jobs():
        next_run = getattr(job, "next_run_time", None)

        jobs.append({
            'id': job.id,
            'name': job.name,
            'next_run': next_run.isoformat() if next_run else None,
            'trigger': str(job.trigger)
        })

    return jobs
