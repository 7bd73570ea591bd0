"""Job description normalization for text loaded outside the wizard."""

from __future__ import annotations

import re
from pathlib import Path

from job_tailor.models.job import JobPosting


def normalize_jd(text: str) -> str:
    """Collapse runs of spaces and blank lines, strip every line."""
    text = re.sub(r"[ \t]+", " ", text)
    lines = [line.strip() for line in text.splitlines()]
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()


def load_job_posting(
    file_path: str | Path,
    role: str | None = None,
    company: str | None = None,
) -> JobPosting:
    """Read a job description file into a JobPosting."""
    text = normalize_jd(Path(file_path).read_text(encoding="utf-8"))
    return JobPosting(text=text, role=role, company=company)
