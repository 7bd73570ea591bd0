"""Tailoring: rewrites the CV and drafts a cover letter and outreach email."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from job_tailor.clients.llm_client import LLMClient, LLMResponse
from job_tailor.errors import TailoringError
from job_tailor.models.tailoring import TailoredBundle
from job_tailor.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a world-class professional career consultant and expert copywriter. \
Your task is to generate a tailored CV, a high-impact cover letter and a short \
outreach email.

CV GUIDELINES:
- Update the master CV to highlight achievements relevant to the Job Description.
- Use only facts present in the master CV. Do not invent experience.
- Keep it professional and standard in format (Markdown).

COVER LETTER GUIDELINES (MANDATORY STRUCTURE):
- Tone: professional, confident and engaging. Avoid generic AI fluff.
- Format: standard business letter with contact header placeholders.
- Structure:
    1. Header & introduction: state the role and why you are excited.
    2. Body paragraph 1: connect your background to the most important skill in the JD.
    3. Body paragraph 2: a specific achievement (with numbers if possible).
    4. Conclusion & call to action: professional sign-off.
- Length: 250-400 words. The letter must be complete; never stop mid-sentence.

EMAIL GUIDELINES:
- A concise, effective outreach message to a recruiter or hiring manager.

Respond ONLY with a JSON object:
{
  "cv": "Markdown formatted tailored CV",
  "coverLetter": "complete cover letter",
  "emailBody": "outreach email body"
}"""


class TailoringClient:
    def __init__(
        self,
        llm: LLMClient,
        model: str = "claude-sonnet-4-5-20250929",
        max_tokens: int = 4000,
        temperature: float = 0.3,
    ):
        self.llm = llm
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.last_response: LLMResponse | None = None

    async def tailor(self, resume_text: str, jd_text: str) -> TailoredBundle:
        """Generate the tailored CV, cover letter and email body.

        Raises TailoringError when the request fails or the body is empty,
        not JSON, or missing one of the three documents.
        """
        prompt = f"""Master CV:
{resume_text}

Job Description:
{jd_text}

Respond with the JSON object only."""

        self.last_response = None
        try:
            response = await self.llm.generate(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            raise TailoringError(str(e) or type(e).__name__) from e
        self.last_response = response

        if not response.text.strip():
            raise TailoringError("Empty response from AI tailoring model.")
        try:
            data = extract_json(response.text)
            return TailoredBundle(**data)
        except (ValueError, ValidationError, TypeError) as e:
            logger.warning("Unusable tailoring response: %s", response.text[:200])
            raise TailoringError(f"Unparseable response from AI tailoring model: {e}") from e
