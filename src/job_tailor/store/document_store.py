"""Typed access to the two persisted wizard entities."""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from job_tailor.models.job import JobPosting
from job_tailor.models.resume import ResumeDocument
from job_tailor.store.local_store import LocalStore

logger = logging.getLogger(__name__)

RESUME_KEY = "jobtailor_cv_v1"
JOB_POSTING_KEY = "jobtailor_jd_v1"

M = TypeVar("M", bound=BaseModel)


class DocumentStore:
    """Mirrors ResumeDocument and JobPosting into a LocalStore as JSON.

    Saving ``None`` removes the entry. A missing or malformed entry reads
    back as ``None``.
    """

    def __init__(self, local: LocalStore):
        self.local = local

    def load_resume(self) -> ResumeDocument | None:
        return self._load(RESUME_KEY, ResumeDocument)

    def save_resume(self, resume: ResumeDocument | None) -> None:
        self._save(RESUME_KEY, resume)

    def load_job_posting(self) -> JobPosting | None:
        return self._load(JOB_POSTING_KEY, JobPosting)

    def save_job_posting(self, posting: JobPosting | None) -> None:
        self._save(JOB_POSTING_KEY, posting)

    def clear(self) -> None:
        self.local.remove_item(RESUME_KEY)
        self.local.remove_item(JOB_POSTING_KEY)

    def _load(self, key: str, model: type[M]) -> M | None:
        raw = self.local.get_item(key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            if data is None:
                return None
            return model.model_validate(data)
        except (json.JSONDecodeError, ValidationError, TypeError):
            logger.warning("Failed to load %s from storage", key, exc_info=True)
            return None

    def _save(self, key: str, value: BaseModel | None) -> None:
        if value is None:
            self.local.remove_item(key)
        else:
            self.local.set_item(key, value.model_dump_json(by_alias=True, exclude_none=True))
