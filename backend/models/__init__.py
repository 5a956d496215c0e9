from .enums import ReportFormat
from .errors import (
    CalculationError,
    CaptureUnavailableError,
    RenderError,
    ROIError,
    StoreUnavailableError,
)
from .scenario import (
    ReportPayload,
    ScenarioInput,
    ScenarioRecord,
    ScenarioResult,
    ScenarioSummary,
)

__all__ = [
    "ReportFormat",
    "ROIError",
    "CalculationError",
    "RenderError",
    "StoreUnavailableError",
    "CaptureUnavailableError",
    "ScenarioInput",
    "ScenarioResult",
    "ScenarioSummary",
    "ScenarioRecord",
    "ReportPayload",
]
