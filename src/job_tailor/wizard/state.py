"""Wizard steps and the application state the controller owns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from job_tailor.models.analysis import AnalysisResult
from job_tailor.models.job import JobPosting
from job_tailor.models.resume import ResumeDocument
from job_tailor.models.tailoring import TailoredBundle


class Step(str, Enum):
    LANDING = "landing"
    UPLOAD_CV = "upload_cv"
    JOB_DETAILS = "job_details"
    ANALYSIS = "analysis"
    TAILORING = "tailoring"
    OUTREACH = "outreach"


# Steps shown in the progress indicator (the landing page has none).
PROGRESS_STEPS: tuple[tuple[Step, str], ...] = (
    (Step.UPLOAD_CV, "Upload CV"),
    (Step.JOB_DETAILS, "Job Description"),
    (Step.ANALYSIS, "ATS Analysis"),
    (Step.TAILORING, "Tailored Assets"),
    (Step.OUTREACH, "Send Outreach"),
)


def progress_fraction(step: Step) -> float:
    """Position of ``step`` along the indicator, 0.0 to 1.0."""
    ids = [s for s, _ in PROGRESS_STEPS]
    if step not in ids:
        return 0.0
    return ids.index(step) / (len(ids) - 1)


@dataclass
class WizardState:
    """Everything the views render from.

    Mutated only by WizardController.
    """

    step: Step = Step.LANDING
    resume: ResumeDocument | None = None
    job_posting: JobPosting | None = None
    analysis: AnalysisResult | None = None
    tailored: TailoredBundle | None = None
    busy: bool = False
    payment_modal_open: bool = False
    processing_payment: bool = False
    editing: bool = False
    editor_text: str = ""
    error: str | None = None

    @property
    def has_resume(self) -> bool:
        return self.resume is not None and not self.resume.is_empty

    @property
    def has_job_text(self) -> bool:
        return self.job_posting is not None and bool(self.job_posting.text.strip())
