"""Pydantic model for the pasted job description."""

from __future__ import annotations

from pydantic import BaseModel


class JobPosting(BaseModel):
    text: str
    role: str | None = None
    company: str | None = None
