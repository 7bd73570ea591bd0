"""Pydantic model for the ATS analysis response."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AnalysisResult(BaseModel):
    score: float = Field(ge=0, le=100)
    missing_keywords: list[str] = Field(alias="missingKeywords")
    strengths: list[str]
    suggestions: list[str]

    model_config = {"populate_by_name": True}

    @property
    def display_score(self) -> int:
        return round(self.score)
