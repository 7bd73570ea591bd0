"""Converts an uploaded résumé file into a single text string."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import PurePath
from typing import Callable, Mapping

from job_tailor.errors import DocumentImportError

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = ("txt", "md", "rtf", "pdf", "docx")

# A TextExtractor turns raw file bytes into text.
TextExtractor = Callable[[bytes], str]


def extract_pdf_text(data: bytes) -> str:
    """Extract text from every page in page order, one line per page."""
    import fitz  # pymupdf

    doc = fitz.open(stream=data, filetype="pdf")
    try:
        text = ""
        for page in doc:
            words = page.get_text("words")
            text += " ".join(w[4] for w in words) + "\n"
        return text
    finally:
        doc.close()


def extract_docx_text(data: bytes) -> str:
    from docx import Document

    doc = Document(BytesIO(data))
    return "\n".join(p.text for p in doc.paragraphs)


def extract_plain_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


DEFAULT_EXTRACTORS: dict[str, TextExtractor] = {
    "pdf": extract_pdf_text,
    "docx": extract_docx_text,
}


def file_extension(file_name: str) -> str:
    return PurePath(file_name).suffix.lower().lstrip(".")


class DocumentImporter:
    """Dispatches on file extension to an injected TextExtractor.

    Extensions without a registered extractor fall back to reading the
    bytes as text, which is best-effort for binary formats.
    """

    def __init__(
        self,
        extractors: Mapping[str, TextExtractor] | None = None,
        fallback: TextExtractor = extract_plain_text,
    ):
        self.extractors = dict(DEFAULT_EXTRACTORS if extractors is None else extractors)
        self.fallback = fallback

    def extract(self, file_name: str, data: bytes) -> str:
        """Return the file's text, raising DocumentImportError if there is none."""
        ext = file_extension(file_name)
        extractor = self.extractors.get(ext, self.fallback)
        logger.debug("Importing %s via %s", file_name, getattr(extractor, "__name__", extractor))
        try:
            text = extractor(data)
        except Exception as e:
            raise DocumentImportError(str(e) or type(e).__name__) from e

        if not text or not text.strip():
            raise DocumentImportError("Could not extract any text from the file.")
        return text
