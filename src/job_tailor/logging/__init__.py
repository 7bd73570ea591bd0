"""Usage logging for analysis and tailoring requests."""

from job_tailor.logging.models import UsageLog
from job_tailor.logging.usage_store import UsageStore

__all__ = ["UsageLog", "UsageStore"]
