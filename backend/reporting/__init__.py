"""Report rendering: one content model, HTML and PDF backends."""

from .base import ReportRenderer
from .content import ReportContent, ReportField, ReportSection, build_payload, build_report_content
from .html_renderer import HtmlReportRenderer
from .pdf_renderer import PdfReportRenderer
from .pipeline import Document, DocumentStream, get_renderer, render, render_stream, report_filename

__all__ = [
    "ReportRenderer",
    "ReportContent",
    "ReportField",
    "ReportSection",
    "build_payload",
    "build_report_content",
    "HtmlReportRenderer",
    "PdfReportRenderer",
    "Document",
    "DocumentStream",
    "get_renderer",
    "render",
    "render_stream",
    "report_filename",
]
