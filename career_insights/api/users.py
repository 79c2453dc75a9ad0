"""User profile API: registration, onboarding status, profile updates."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from career_insights.api.deps import get_context, get_generator, identity_http_error
from career_insights.context import RequestContext
from career_insights.exceptions import ProfileNotFound, ProfileUpdateError, Unauthorized
from career_insights.models.base import get_db
from career_insights.models.user import User
from career_insights.services.insight_generator import InsightGenerator
from career_insights.services.insight_records import insight_to_dict
from career_insights.services.profile_service import ProfileMutation, ProfileService
from career_insights.utils.industry import join_industry
from career_insights.utils.logger import log

router = APIRouter(prefix="/users", tags=["users"])


# ── Schemas ──────────────────────────────────────────────

class RegisterRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class UpdateProfileRequest(ProfileMutation):
    # Onboarding form sends the industry as two parts
    main_industry: Optional[str] = None
    sub_industry: Optional[str] = None

    def to_mutation(self) -> ProfileMutation:
        industry = (self.industry or "").strip() or None
        if not industry and self.main_industry:
            industry = join_industry(self.main_industry, self.sub_industry)
        return ProfileMutation(
            industry=industry,
            experience=self.experience,
            bio=self.bio,
            skills=self.skills,
            return_to=self.return_to,
        )


def _user_out(u: User) -> dict:
    return {
        "id": u.id,
        "email": u.email,
        "name": u.name,
        "industry": u.industry,
        "experience": u.experience,
        "bio": u.bio,
        "skills": u.skills or [],
    }


# ── Endpoints ────────────────────────────────────────────

@router.post("/register")
async def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
):
    """Create the profile for the signed-in identity (idempotent)."""
    try:
        user = ProfileService(db).register(context, email=body.email, name=body.name)
        return {"success": True, "user": _user_out(user)}
    except Unauthorized as e:
        raise identity_http_error(e)


@router.get("/me")
async def get_profile(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
):
    """Profile details for the edit form, with the industry split into parts."""
    try:
        return ProfileService(db).get_profile_for_edit(context)
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)


@router.get("/me/onboarding")
async def get_onboarding_status(
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
):
    try:
        return ProfileService(db).get_onboarding_status(context)
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)


@router.put("/me")
def update_profile(
    body: UpdateProfileRequest,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_context),
    generator: InsightGenerator = Depends(get_generator),
):
    """
    Update the profile and reconcile its industry insight.

    Regenerates the insight when the industry changed, none exists yet, or
    the current one is a week old.
    """
    try:
        result = ProfileService(db, generator).reconcile(context, body.to_mutation())
    except (Unauthorized, ProfileNotFound) as e:
        raise identity_http_error(e)
    except ProfileUpdateError as e:
        raise HTTPException(status_code=500, detail=str(e))

    log.info(f"Profile updated for user {context.user_id} (insight refreshed: {result.refreshed})")

    return {
        "success": True,
        "user": _user_out(result.user),
        "industry_insight": insight_to_dict(result.insight) if result.insight else None,
        "redirect_to": result.redirect_to,
    }
