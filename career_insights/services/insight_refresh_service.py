"""
Insight Refresh Service

Weekly sweep that regenerates every industry insight whose next_update has
passed. Each record is regenerated and committed on its own, so one bad reply
or failed write only skips that record.
"""
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from career_insights.config import get_settings
from career_insights.models.industry_insight import IndustryInsight
from career_insights.services.insight_generator import (
    InsightData,
    InsightGenerator,
    build_insight_prompt,
    parse_insight_text,
)
from career_insights.services.insight_records import apply_insight
from career_insights.utils.logger import log
from career_insights.utils.retry import retry_sync


class InsightRefreshService:
    """Service for the scheduled insight refresh"""

    def __init__(
        self,
        db: Session,
        generator: InsightGenerator,
        batch_size: Optional[int] = None,
        concurrency: Optional[int] = None,
        max_attempts: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        sleep: Callable[[float], None] = time.sleep,
    ):
        settings = get_settings()
        self.db = db
        self.generator = generator
        self.batch_size = settings.insight_refresh_batch_size if batch_size is None else batch_size
        self.concurrency = max(1, settings.insight_refresh_concurrency if concurrency is None else concurrency)
        self.max_attempts = max(1, settings.insight_refresh_max_attempts if max_attempts is None else max_attempts)
        self.clock = clock
        self.sleep = sleep

    def refresh_outdated(self, now: Optional[datetime] = None) -> Dict:
        """
        Regenerate all insights due at `now`.

        Returns:
            {"status": "completed", "updated": <succeeded>, "total": <selected>}
        """
        now = now or self.clock()

        query = (
            self.db.query(IndustryInsight.id, IndustryInsight.user_id, IndustryInsight.industry)
            .filter(IndustryInsight.next_update <= now)
        )
        if self.batch_size:
            query = query.limit(self.batch_size)
        outdated = query.all()

        log.info(f"Found {len(outdated)} outdated insights to refresh")

        updated = 0
        if self.concurrency > 1 and len(outdated) > 1:
            # Model calls overlap; writes still happen one at a time, in order
            with ThreadPoolExecutor(max_workers=self.concurrency) as pool:
                futures = [pool.submit(self._generate, row.industry) for row in outdated]
                for row, future in zip(outdated, futures):
                    if self._refresh_one(row, future.result):
                        updated += 1
        else:
            for row in outdated:
                if self._refresh_one(row, lambda: self._generate(row.industry)):
                    updated += 1

        log.info(f"Insight refresh completed: {updated}/{len(outdated)} updated")

        return {
            "status": "completed",
            "updated": updated,
            "total": len(outdated)
        }

    def _generate(self, industry: str) -> InsightData:
        """Call the model directly and parse; raises on any failure."""
        complete = retry_sync(max_attempts=self.max_attempts, sleep=self.sleep)(self.generator.complete)
        text = complete(build_insight_prompt(industry))
        return parse_insight_text(text)

    def _refresh_one(self, row, produce: Callable[[], InsightData]) -> bool:
        try:
            data = produce()

            record = self.db.get(IndustryInsight, row.id)
            if record is None:
                raise LookupError(f"insight {row.id} no longer exists")

            apply_insight(record, data, self.clock())
            self.db.commit()
            return True

        except Exception as e:
            self.db.rollback()
            log.error(f"Error updating insight for {row.industry} (user {row.user_id}): {str(e)}")
            return False
