"""ATS analysis: scores a résumé against a job description."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from job_tailor.clients.llm_client import LLMClient, LLMResponse
from job_tailor.errors import AnalysisError
from job_tailor.models.analysis import AnalysisResult
from job_tailor.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an Applicant Tracking System (ATS) expert. You compare a candidate's \
CV with a job description the way screening software does: by keywords, \
required skills, seniority signals and standard section structure.

Respond ONLY with a JSON object of this exact shape:
{
  "score": 0-100 integer ATS compatibility score,
  "missingKeywords": ["keyword from the job description absent from the CV"],
  "strengths": ["aspect of the CV that already matches the role"],
  "suggestions": ["specific, actionable improvement"]
}"""


class AnalysisClient:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-haiku-4-5-20251001",
        max_tokens: int = 2048,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens
        self.last_response: LLMResponse | None = None

    async def analyze(self, resume_text: str, jd_text: str) -> AnalysisResult:
        """Score the CV against the job description.

        Raises AnalysisError when the request fails or the body is empty,
        not JSON, or not shaped like an AnalysisResult.
        """
        prompt = f"""Analyze the following CV against the provided Job Description. \
Provide an ATS compatibility score (0-100) and specific improvement suggestions.

CV:
{resume_text}

Job Description:
{jd_text}"""

        self.last_response = None
        try:
            response = await self.llm.generate(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            raise AnalysisError(str(e) or type(e).__name__) from e
        self.last_response = response

        if not response.text.strip():
            raise AnalysisError("Empty response from AI analysis model.")
        try:
            data = extract_json(response.text)
            return AnalysisResult(**data)
        except (ValueError, ValidationError, TypeError) as e:
            logger.warning("Unusable analysis response: %s", response.text[:200])
            raise AnalysisError(f"Unparseable response from AI analysis model: {e}") from e
