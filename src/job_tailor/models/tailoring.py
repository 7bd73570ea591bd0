"""Pydantic model for the tailored résumé, cover letter and outreach email."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TailoredBundle(BaseModel):
    cv: str  # Markdown
    cover_letter: str = Field(alias="coverLetter")
    email_body: str = Field(alias="emailBody")

    model_config = {"populate_by_name": True}
