"""Word-compatible export: paragraphs in an Office-namespaced HTML shell."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from job_tailor.export.base import ExportedFile, split_paragraphs

TEMPLATE_DIR = Path(__file__).parent
TEMPLATE_NAME = "word_document.html"


class WordRenderer:
    """Renders a ``.doc`` file that word processors open as a document.

    The first paragraph carries the ``header`` class. Line breaks inside a
    paragraph become ``<br>``.
    """

    mime_type = "application/vnd.ms-word"

    def __init__(self, title: str = "Export"):
        self.title = title
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=True,
        )

    def render(self, text: str, stem: str) -> ExportedFile:
        return ExportedFile(
            filename=f"{stem}.doc",
            data=self.render_html(text).encode("utf-8"),
            mime_type=self.mime_type,
        )

    def render_html(self, text: str) -> str:
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(title=self.title, paragraphs=split_paragraphs(text))
