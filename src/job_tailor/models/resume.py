"""Pydantic model for the uploaded master résumé."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ResumeDocument(BaseModel):
    content: str
    file_name: str = Field(alias="fileName")

    model_config = {"populate_by_name": True}

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()
