"""Report rendering entry points: validate, assemble content, pick a backend."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterator, Mapping, Optional, Union

from backend.models.enums import ReportFormat
from backend.models.scenario import ReportPayload

from .base import DEFAULT_CHUNK_SIZE, ReportRenderer
from .content import build_report_content
from .html_renderer import HtmlReportRenderer
from .pdf_renderer import PdfReportRenderer

logger = logging.getLogger(__name__)

_RENDERERS: dict[ReportFormat, type[ReportRenderer]] = {
    ReportFormat.HTML: HtmlReportRenderer,
    ReportFormat.PDF: PdfReportRenderer,
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

PayloadLike = Union[ReportPayload, Mapping[str, Any], None]


@dataclass(frozen=True)
class Document:
    """A fully rendered report."""

    content: Union[str, bytes]
    media_type: str
    filename: str


@dataclass
class DocumentStream:
    """A report delivered as chunks; exhausting ``chunks`` ends the stream."""

    chunks: Iterator[bytes]
    media_type: str
    filename: str

    def close(self) -> None:
        close = getattr(self.chunks, "close", None)
        if close is not None:
            close()


def get_renderer(fmt: Union[ReportFormat, str], **kwargs: Any) -> ReportRenderer:
    """Instantiate the backend for a report format."""
    return _RENDERERS[ReportFormat(fmt)](**kwargs)


def report_filename(scenario_name: str, fmt: Union[ReportFormat, str]) -> str:
    """Attachment filename derived from the scenario name."""
    safe = _UNSAFE_FILENAME_CHARS.sub("-", scenario_name).strip("-") or "scenario"
    return f"ROI-Report-{safe}.{ReportFormat(fmt).value}"


def render(
    fmt: Union[ReportFormat, str],
    payload: PayloadLike,
    report_date: Optional[date] = None,
    renderer: Optional[ReportRenderer] = None,
) -> Document:
    """Render a scenario report in full.

    Raises RenderError before producing any output if the payload is
    incomplete.
    """
    fmt = ReportFormat(fmt)
    content = build_report_content(payload, report_date)
    renderer = renderer or get_renderer(fmt)
    logger.info("Rendering %s report for '%s'", fmt.value, content.scenario_name)
    return Document(
        content=renderer.render(content),
        media_type=renderer.media_type,
        filename=report_filename(content.scenario_name, fmt),
    )


def render_stream(
    fmt: Union[ReportFormat, str],
    payload: PayloadLike,
    report_date: Optional[date] = None,
    renderer: Optional[ReportRenderer] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DocumentStream:
    """Like render(), but hands the document out in chunks.

    The payload is validated eagerly, so a RenderError is raised here and
    not from the first iteration of the stream.
    """
    fmt = ReportFormat(fmt)
    content = build_report_content(payload, report_date)
    renderer = renderer or get_renderer(fmt)
    logger.info("Streaming %s report for '%s'", fmt.value, content.scenario_name)
    return DocumentStream(
        chunks=renderer.stream(content, chunk_size=chunk_size),
        media_type=renderer.media_type,
        filename=report_filename(content.scenario_name, fmt),
    )
