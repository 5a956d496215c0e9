"""Error taxonomy shared by the engine, the renderer and the collaborators."""

from __future__ import annotations

from typing import Iterable, Optional


class ROIError(Exception):
    """Base class for every failure the ROI backend reports to a caller."""

    kind: str = "error"

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields: list[str] = list(fields or [])

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message, "fields": self.fields}


class CalculationError(ROIError):
    """Scenario inputs are missing, non-numeric or out of range."""

    kind = "invalid-input"


class RenderError(ROIError):
    """Report payload is structurally incomplete."""

    kind = "missing-data"


class StoreUnavailableError(ROIError):
    """The scenario store could not be reached or rejected the operation."""

    kind = "store-unavailable"


class CaptureUnavailableError(ROIError):
    """The lead-capture collaborator failed to record an email."""

    kind = "capture-unavailable"
