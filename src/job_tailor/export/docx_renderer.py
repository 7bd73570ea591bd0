"""Native .docx export built with python-docx."""

from __future__ import annotations

import re
from io import BytesIO

from docx import Document
from docx.shared import Pt

from job_tailor.export.base import ExportedFile, split_paragraphs

HEADER_THRESHOLD = 200


class DocxRenderer:
    mime_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def __init__(self, header_threshold: int = HEADER_THRESHOLD):
        self.header_threshold = header_threshold

    def render(self, text: str, stem: str) -> ExportedFile:
        return ExportedFile(
            filename=f"{stem}.docx",
            data=self.render_bytes(text),
            mime_type=self.mime_type,
        )

    def render_bytes(self, text: str) -> bytes:
        doc = Document()
        style = doc.styles["Normal"]
        style.font.name = "Arial"
        style.font.size = Pt(11)

        for index, para in enumerate(split_paragraphs(text.strip())):
            para = re.sub(r"^#{1,6}\s?", "", para.strip(), flags=re.MULTILINE)
            is_header = index == 0 and len(para) < self.header_threshold
            p = doc.add_paragraph()
            for i, line in enumerate(para.split("\n")):
                if i:
                    p.add_run().add_break()
                _add_rich_text(p, line, bold=is_header, size=Pt(14) if is_header else None)

        buf = BytesIO()
        doc.save(buf)
        return buf.getvalue()


def _add_rich_text(paragraph, text: str, bold: bool = False, size=None) -> None:
    """Add a line, turning **bold** and *italic* spans into real formatting."""
    parts = re.split(r"(\*\*.+?\*\*|\*.+?\*)", text)
    for part in parts:
        if not part:
            continue
        run_bold = bold
        italic = False
        if part.startswith("**") and part.endswith("**") and len(part) > 4:
            part = part[2:-2]
            run_bold = True
        elif part.startswith("*") and part.endswith("*") and len(part) > 2:
            part = part[1:-1]
            italic = True
        run = paragraph.add_run(part)
        run.bold = run_bold or None
        run.italic = italic or None
        if size is not None:
            run.font.size = size
