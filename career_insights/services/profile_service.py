"""
Profile Service

Profile reads and the reconciliation path: a profile update and the matching
industry-insight upsert are applied together in one transaction.
"""
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from career_insights.config import Settings, get_settings
from career_insights.context import RequestContext
from career_insights.exceptions import (
    ProfileNotFound,
    ProfileUpdateError,
    ReconciliationTimeout,
    Unauthorized,
)
from career_insights.models.industry_insight import IndustryInsight
from career_insights.models.user import User
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.insight_records import apply_insight, new_insight
from career_insights.services.staleness import needs_refresh
from career_insights.utils.industry import split_industry
from career_insights.utils.logger import log


class ProfileMutation(BaseModel):
    """Requested profile changes. None means "keep the current value"."""
    industry: Optional[str] = None
    experience: Optional[int] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    return_to: Optional[str] = None


@dataclass
class ReconcileResult:
    user: User
    insight: Optional[IndustryInsight]
    redirect_to: str
    refreshed: bool = False


def load_profile(db: Session, context: RequestContext) -> User:
    """
    Resolve the acting user's profile.

    Raises:
        Unauthorized: no verified identity
        ProfileNotFound: identity has no profile row
    """
    if not context.is_authenticated:
        raise Unauthorized()

    user = db.query(User).filter(User.external_user_id == context.user_id).first()
    if not user:
        raise ProfileNotFound(context.user_id)
    return user


class ProfileService:
    """
    Service for profile reads and profile/insight reconciliation

    Read paths need no generator; reconcile fails without one only when the
    insight actually has to be regenerated.
    """

    def __init__(
        self,
        db: Session,
        generator: Optional[InsightGenerator] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.db = db
        self.generator = generator
        self.settings = settings or get_settings()
        self.clock = clock
        self.timer = timer

    def register(
        self,
        context: RequestContext,
        email: Optional[str] = None,
        name: Optional[str] = None,
    ) -> User:
        """Create the profile for a verified identity, or return the existing one."""
        if not context.is_authenticated:
            raise Unauthorized()

        user = self.db.query(User).filter(User.external_user_id == context.user_id).first()
        if user:
            return user

        user = User(external_user_id=context.user_id, email=email, name=name, skills=[])
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request registered the same identity first
            self.db.rollback()
            return self.db.query(User).filter(User.external_user_id == context.user_id).one()

        log.info(f"Registered profile for user {context.user_id}")
        return user

    def get_onboarding_status(self, context: RequestContext) -> Dict:
        user = load_profile(self.db, context)
        return {"is_onboarded": bool(user.industry and user.industry.strip())}

    def get_profile_for_edit(self, context: RequestContext) -> Dict:
        """Profile fields plus the compound industry split into its parts."""
        user = load_profile(self.db, context)
        main_industry, sub_industry = split_industry(user.industry)
        return {
            "id": user.id,
            "industry": user.industry,
            "experience": user.experience,
            "bio": user.bio,
            "skills": user.skills or [],
            "main_industry": main_industry,
            "sub_industry": sub_industry,
        }

    def reconcile(self, context: RequestContext, mutation: ProfileMutation) -> ReconcileResult:
        """
        Apply a profile update and bring its industry insight up to date.

        The profile write and the insight upsert commit together or not at
        all. Model generation runs inside the transaction, so the whole
        operation gets the longer reconcile_timeout_seconds budget.

        Raises:
            Unauthorized / ProfileNotFound: identity problems
            ProfileUpdateError: anything else; the transaction was rolled back
        """
        started = self.timer()
        user = load_profile(self.db, context)
        redirect_to = mutation.return_to or self.settings.default_redirect

        try:
            insight = user.industry_insight
            industry = (mutation.industry or "").strip() or user.industry

            user.industry = industry
            if mutation.experience is not None:
                user.experience = mutation.experience
            if mutation.bio is not None:
                user.bio = mutation.bio
            user.skills = mutation.skills or user.skills or []

            decision = needs_refresh(industry, insight, self.clock())
            if decision.refresh:
                if self.generator is None:
                    raise RuntimeError("No insight generator configured")
                log.info(
                    f"Refreshing insight for user {context.user_id}: "
                    f"{decision.reason.value} ({industry})"
                )
                data = self.generator.generate(industry, timeout=self._remaining(started))
                now = self.clock()
                if insight is None:
                    insight = new_insight(user.id, industry, data, now)
                    self.db.add(insight)
                else:
                    apply_insight(insight, data, now, industry=industry)

            self._check_budget(started)
            self.db.commit()

        except Exception as e:
            self.db.rollback()
            log.error(f"Error updating user {context.user_id}: {str(e)}")
            raise ProfileUpdateError(e) from e

        self.db.refresh(user)
        if insight is not None:
            self.db.refresh(insight)

        return ReconcileResult(
            user=user,
            insight=insight,
            redirect_to=redirect_to,
            refreshed=decision.refresh,
        )

    def _remaining(self, started: float) -> float:
        budget = self.settings.reconcile_timeout_seconds
        remaining = budget - (self.timer() - started)
        if remaining <= 0:
            raise ReconciliationTimeout(budget, self.timer() - started)
        return remaining

    def _check_budget(self, started: float):
        budget = self.settings.reconcile_timeout_seconds
        elapsed = self.timer() - started
        if elapsed > budget:
            raise ReconciliationTimeout(budget, elapsed)
