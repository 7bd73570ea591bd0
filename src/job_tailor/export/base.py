from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    data: bytes
    mime_type: str


class DocumentRenderer(Protocol):
    def render(self, text: str, stem: str) -> ExportedFile: ...


def split_paragraphs(text: str) -> list[str]:
    """Split on blank-line boundaries."""
    return PARAGRAPH_BREAK.split(text)


def strip_markdown(text: str) -> str:
    """Remove heading markers and bold/italic emphasis markers."""
    text = re.sub(r"#{1,6}\s?", "", text)
    text = text.replace("**", "")
    text = text.replace("*", "")
    return text.strip()
