"""job-tailor: résumé upload, ATS scoring and tailored application documents."""

__version__ = "0.1.0"
