"""
Insight Service

Dashboard read path: returns the user's industry insight, regenerating it
first when the staleness policy says so.
"""
from datetime import datetime
from typing import Callable, Dict

from sqlalchemy.orm import Session

from career_insights.context import RequestContext
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.insight_records import (
    apply_insight,
    insight_to_dict,
    new_insight,
    placeholder_insight,
)
from career_insights.services.profile_service import load_profile
from career_insights.services.staleness import needs_refresh
from career_insights.utils.logger import log


class InsightService:
    """Service for reading (and lazily refreshing) industry insights"""

    def __init__(
        self,
        db: Session,
        generator: InsightGenerator,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.db = db
        self.generator = generator
        self.clock = clock

    def get_industry_insights(self, context: RequestContext) -> Dict:
        """
        Current insight for the acting user.

        Profiles without an industry get an unpersisted placeholder. Identity
        errors propagate; any other failure degrades to the error placeholder.
        """
        user = load_profile(self.db, context)

        if not user.industry or not user.industry.strip():
            return placeholder_insight("default", self.clock())

        try:
            insight = user.industry_insight
            decision = needs_refresh(user.industry, insight, self.clock())

            if decision.refresh:
                log.info(
                    f"Insight for user {context.user_id} needs refresh: {decision.reason.value}"
                )
                data = self.generator.generate(user.industry)
                now = self.clock()
                if insight is None:
                    insight = new_insight(user.id, user.industry, data, now)
                    self.db.add(insight)
                else:
                    apply_insight(insight, data, now, industry=user.industry)
                self.db.commit()
                self.db.refresh(insight)

            return insight_to_dict(insight)

        except Exception as e:
            self.db.rollback()
            log.error(f"Error in get_industry_insights for user {context.user_id}: {str(e)}")
            return placeholder_insight("error", self.clock())
