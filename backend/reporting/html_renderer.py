"""HTML report backend, for inline preview or lightweight embedding."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from jinja2 import Environment, FileSystemLoader, select_autoescape

from backend.models.enums import ReportFormat

from .base import DEFAULT_CHUNK_SIZE, ReportRenderer
from .content import ReportContent

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html"


class HtmlReportRenderer(ReportRenderer):
    """Renders report content through a Jinja2 template."""

    format = ReportFormat.HTML
    media_type = "text/html; charset=utf-8"

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, content: ReportContent) -> str:
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(report=content)

    def stream(
        self, content: ReportContent, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> Iterator[bytes]:
        data = self.render(content).encode("utf-8")
        for start in range(0, len(data), chunk_size):
            yield data[start:start + chunk_size]
