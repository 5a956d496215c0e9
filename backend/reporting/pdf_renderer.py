"""PDF report backend, built with ReportLab's platypus layout engine.

The document is laid out into an in-memory buffer and only then handed out
in chunks, so a consumer never sees a partially-built PDF. Closing the chunk
generator early releases the buffer.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Iterator
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from backend.models.enums import ReportFormat

from .base import DEFAULT_CHUNK_SIZE, ReportRenderer
from .content import ReportContent, ReportSection

logger = logging.getLogger(__name__)

PAGE_W, PAGE_H = letter
MARGIN = 0.75 * inch

ACCENT = "#0056b3"
ROW_BG = "#f4f4f4"


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": base["Title"],
        "date": base["Normal"],
        "scenario": base["Heading2"],
        "section": base["Heading3"],
        "field": ParagraphStyle(
            "ReportField",
            parent=base["Normal"],
            backColor=colors.HexColor(ROW_BG),
            borderPadding=6,
            leftIndent=6,
            rightIndent=6,
            spaceBefore=6,
            spaceAfter=10,
        ),
    }


def _footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(colors.grey)
    canvas.drawRightString(PAGE_W - MARGIN, 0.5 * inch, f"Page {doc.page}")
    canvas.restoreState()


class PdfReportRenderer(ReportRenderer):
    """Lays report content out on letter-size pages."""

    format = ReportFormat.PDF
    media_type = "application/pdf"

    def __init__(self, compress: bool = False):
        self.compress = compress
        self._styles = _styles()

    def render(self, content: ReportContent) -> bytes:
        return b"".join(self.stream(content))

    def stream(
        self, content: ReportContent, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> Iterator[bytes]:
        buffer = BytesIO()
        try:
            self._build(content, buffer)
            buffer.seek(0)
            while True:
                chunk = buffer.read(chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            buffer.close()

    def _build(self, content: ReportContent, buffer: BytesIO) -> None:
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=f"ROI Report for {content.scenario_name}",
            author="Invoice ROI Simulator",
            pageCompression=1 if self.compress else 0,
            invariant=1,
        )
        styles = self._styles
        story = [
            Paragraph(escape(content.title), styles["title"]),
            Paragraph(f"Generated on: {escape(content.generated_on)}", styles["date"]),
            Spacer(1, 0.2 * inch),
            Paragraph(f"Scenario: {escape(content.scenario_name)}", styles["scenario"]),
        ]
        for section in content.sections:
            story.append(Paragraph(escape(section.heading), styles["section"]))
            story.extend(self._section_fields(section))
            story.append(Spacer(1, 0.15 * inch))

        doc.build(story, onFirstPage=_footer, onLaterPages=_footer)
        logger.debug(
            "Built PDF report for '%s' (%d pages)", content.scenario_name, doc.page
        )

    def _section_fields(self, section: ReportSection) -> list[Paragraph]:
        # One paragraph per field so long values can break across pages
        style = self._styles["field"]
        return [
            Paragraph(
                f'<font name="Helvetica-Bold" color="{ACCENT}">{escape(field.label)}:</font>'
                f" {escape(field.value)}",
                style,
            )
            for field in section.fields
        ]
