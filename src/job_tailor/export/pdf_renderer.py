"""PDF export using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging
from fpdf import FPDF
from fpdf.enums import MethodReturnValue

from job_tailor.export.base import ExportedFile, split_paragraphs, strip_markdown

logger = logging.getLogger(__name__)

MARGIN_MM = 20
PAGE_BOTTOM_MM = 280
LINE_CHECK_MM = 7
LINE_ADVANCE_MM = 6
PARAGRAPH_GAP_MM = 8
HEADER_THRESHOLD = 200


class PdfRenderer:
    """Paragraph-based A4 letter layout.

    The first paragraph is set in a larger bold style when it is short
    enough to be a name/contact block.
    """

    mime_type = "application/pdf"

    def __init__(self, header_threshold: int = HEADER_THRESHOLD):
        self.header_threshold = header_threshold

    def render(self, text: str, stem: str) -> ExportedFile:
        return ExportedFile(
            filename=f"{stem}.pdf",
            data=self.render_bytes(text),
            mime_type=self.mime_type,
        )

    def render_bytes(self, text: str) -> bytes:
        pdf = FPDF(unit="mm", format="A4")
        pdf.set_auto_page_break(auto=False)
        pdf.set_margins(MARGIN_MM, MARGIN_MM, MARGIN_MM)
        pdf.add_page()
        content_width = pdf.w - 2 * MARGIN_MM

        cursor_y = MARGIN_MM
        for index, para in enumerate(split_paragraphs(strip_markdown(text))):
            if index == 0 and len(para) < self.header_threshold:
                pdf.set_font("Helvetica", style="B", size=14)
            else:
                pdf.set_font("Helvetica", size=11)

            lines = pdf.multi_cell(
                content_width, LINE_ADVANCE_MM, _latin1(para.strip()),
                dry_run=True, output=MethodReturnValue.LINES,
            )
            if cursor_y + len(lines) * LINE_CHECK_MM > PAGE_BOTTOM_MM:
                pdf.add_page()
                cursor_y = MARGIN_MM

            for i, line in enumerate(lines):
                pdf.text(MARGIN_MM, cursor_y + i * LINE_ADVANCE_MM, line)
            cursor_y += len(lines) * LINE_ADVANCE_MM + PARAGRAPH_GAP_MM

        logger.debug("Rendered PDF with %d page(s)", pdf.page_no())
        return bytes(pdf.output())


def _latin1(text: str) -> str:
    """Core fonts only cover latin-1; replace anything outside it."""
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")
