"""Export of tailored documents to PDF and Word formats."""
from job_tailor.export.base import DocumentRenderer, ExportedFile, split_paragraphs
from job_tailor.export.docx_renderer import DocxRenderer
from job_tailor.export.pdf_renderer import PdfRenderer
from job_tailor.export.word_renderer import WordRenderer

RENDERERS: dict[str, type] = {
    "pdf": PdfRenderer,
    "doc": WordRenderer,
    "docx": DocxRenderer,
}

__all__ = [
    "DocumentRenderer",
    "DocxRenderer",
    "ExportedFile",
    "PdfRenderer",
    "RENDERERS",
    "WordRenderer",
    "split_paragraphs",
]
