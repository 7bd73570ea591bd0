"""Handoff of the outreach email to the user's mail client or clipboard."""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

DEFAULT_SUBJECT = "Job Application"

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class Clipboard(Protocol):
    def copy(self, text: str) -> None: ...


def build_mailto_url(body: str, subject: str = DEFAULT_SUBJECT) -> str:
    return (
        f"mailto:?subject={quote(subject, safe=_URI_COMPONENT_SAFE)}"
        f"&body={quote(body, safe=_URI_COMPONENT_SAFE)}"
    )
