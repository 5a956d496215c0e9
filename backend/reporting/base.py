from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Union

from backend.models.enums import ReportFormat

from .content import ReportContent

DEFAULT_CHUNK_SIZE = 8192


class ReportRenderer(ABC):
    """Abstract base for all report output formats."""

    format: ReportFormat
    media_type: str

    @abstractmethod
    def render(self, content: ReportContent) -> Union[str, bytes]:
        """Render the complete document."""
        ...

    @abstractmethod
    def stream(
        self, content: ReportContent, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> Iterator[bytes]:
        """Yield the encoded document in chunks; exhaustion marks the end."""
        ...
