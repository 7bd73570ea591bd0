"""Persistence for the résumé and job description across restarts."""

from job_tailor.store.document_store import (
    JOB_POSTING_KEY,
    RESUME_KEY,
    DocumentStore,
)
from job_tailor.store.local_store import LocalStore

__all__ = ["DocumentStore", "JOB_POSTING_KEY", "LocalStore", "RESUME_KEY"]
