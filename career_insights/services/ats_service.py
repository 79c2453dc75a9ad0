"""
ATS Service

Scores a resume against a job description with one LLM call.
"""
import json
from typing import Dict, Optional

from anthropic import Anthropic

from career_insights.config import Settings, get_settings
from career_insights.exceptions import AtsScoringError
from career_insights.services.insight_generator import strip_code_fences
from career_insights.utils.logger import log

RESULT_KEYS = ("JD Match", "MissingKeywords", "Profile Summary")


def build_ats_prompt(resume_text: str, job_description: str) -> str:
    return f"""Act like an experienced ATS with expertise in software engineering, data science, and big data.
Evaluate the resume against the given job description.
Provide a JSON response in the format:
{{"JD Match":"%", "MissingKeywords":[], "Profile Summary":""}}

Resume: {resume_text}
Job Description: {job_description}
"""


class AtsService:
    """Resume / job-description match scoring"""

    def __init__(self, client: Optional[Anthropic], model: str, max_tokens: int = 1500):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    @classmethod
    def from_client(cls, client: Optional[Anthropic], settings: Optional[Settings] = None) -> "AtsService":
        settings = settings or get_settings()
        return cls(client, model=settings.ats_model, max_tokens=settings.ats_max_tokens)

    def analyze(self, resume_text: str, job_description: str) -> Dict:
        """
        Returns:
            {"JD Match": ..., "MissingKeywords": [...], "Profile Summary": ...}

        Raises:
            AtsScoringError: the call failed or the reply was not usable JSON
        """
        if self.client is None:
            raise AtsScoringError("AI processing failed")

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": build_ats_prompt(resume_text, job_description)}],
            )
            text = response.content[0].text
        except Exception as e:
            log.error(f"Error fetching ATS analysis: {str(e)}")
            raise AtsScoringError("AI processing failed") from e

        try:
            result = json.loads(strip_code_fences(text))
        except json.JSONDecodeError as e:
            log.error(f"Error parsing ATS response: {str(e)}")
            raise AtsScoringError("Failed to parse AI response") from e

        if not isinstance(result, dict) or not all(k in result for k in RESULT_KEYS):
            log.error(f"ATS response missing keys: {result!r:.200}")
            raise AtsScoringError("Failed to parse AI response")

        return result
