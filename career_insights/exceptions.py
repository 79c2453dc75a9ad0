"""Exceptions raised by the Career Insights services."""

from typing import Optional


class CareerInsightsError(Exception):
    """Base class for service errors."""


class Unauthorized(CareerInsightsError):
    """No verified identity on the request."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ProfileNotFound(CareerInsightsError):
    """The verified identity has no backing profile."""

    def __init__(self, user_id: Optional[str] = None):
        self.user_id = user_id
        super().__init__("User not found")


class InsightParseError(CareerInsightsError):
    """
    Model reply could not be turned into an insight record.

    Attributes:
        message: Error description
        raw_text: The (possibly truncated) reply that failed to parse
    """

    def __init__(self, message: str, raw_text: Optional[str] = None):
        self.message = message
        self.raw_text = raw_text

        parts = [message]
        if raw_text:
            snippet = raw_text[:200] + "..." if len(raw_text) > 200 else raw_text
            parts.append(f"\nReply:\n{snippet}")

        super().__init__("".join(parts))


class ReconciliationTimeout(CareerInsightsError):
    """Profile reconciliation ran past its time budget."""

    def __init__(self, budget_seconds: float, elapsed_seconds: float):
        self.budget_seconds = budget_seconds
        self.elapsed_seconds = elapsed_seconds
        super().__init__(
            f"Reconciliation exceeded its {budget_seconds:.0f}s budget "
            f"({elapsed_seconds:.1f}s elapsed)"
        )


class ProfileUpdateError(CareerInsightsError):
    """A profile update failed and was rolled back."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to update profile: {cause}")


class AtsScoringError(CareerInsightsError):
    """ATS analysis could not produce a result."""


class AssessmentNotFound(CareerInsightsError):
    """No assessment with this id belongs to the acting user."""

    def __init__(self, assessment_id: Optional[int] = None):
        self.assessment_id = assessment_id
        super().__init__("Assessment not found")
