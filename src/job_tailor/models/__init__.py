"""Data models for the job tailor wizard."""

from job_tailor.models.analysis import AnalysisResult
from job_tailor.models.job import JobPosting
from job_tailor.models.resume import ResumeDocument
from job_tailor.models.tailoring import TailoredBundle

__all__ = [
    "AnalysisResult",
    "JobPosting",
    "ResumeDocument",
    "TailoredBundle",
]
