"""Error taxonomy surfaced by the wizard."""

from __future__ import annotations


class JobTailorError(Exception):
    """Base class for errors the wizard turns into a user-facing message."""


class DocumentImportError(JobTailorError):
    """An uploaded file could not be read or produced no text."""


class AnalysisError(JobTailorError):
    """The ATS analysis request failed or returned an unusable body."""


class TailoringError(JobTailorError):
    """The tailoring request failed or returned an unusable body."""


class PaymentDetailsError(JobTailorError):
    """A required card field was left blank."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing payment details: {', '.join(missing)}")
