"""Format-independent report content.

Both renderers consume the same ReportContent, so the sections, labels and
values of an HTML report and a PDF report never drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from backend.engine.calculator import INFINITE_ROI
from backend.models.errors import RenderError
from backend.models.scenario import ReportPayload

REPORT_TITLE = "Invoicing Automation ROI Report"
KEY_RESULTS_HEADING = "Key Results"
INPUTS_HEADING = "Inputs Used"


@dataclass(frozen=True)
class ReportField:
    label: str
    value: str


@dataclass(frozen=True)
class ReportSection:
    heading: str
    fields: tuple[ReportField, ...]


@dataclass(frozen=True)
class ReportContent:
    """Everything a report shows, in display order."""

    title: str
    generated_on: str
    scenario_name: str
    sections: tuple[ReportSection, ...]


def build_payload(data: Union[ReportPayload, Mapping[str, Any], None]) -> ReportPayload:
    """Validate a raw ``{inputs, results}`` payload.

    Raises RenderError listing the missing or malformed paths.
    """
    if isinstance(data, ReportPayload):
        return data
    if not isinstance(data, Mapping):
        raise RenderError(
            "Report payload must contain inputs and results",
            fields=["inputs", "results"],
        )
    try:
        return ReportPayload.model_validate(dict(data))
    except ValidationError as e:
        fields = []
        for err in e.errors():
            path = ".".join(str(part) for part in err["loc"])
            if path not in fields:
                fields.append(path)
        raise RenderError(
            f"Report payload is incomplete: {', '.join(fields)}", fields=fields
        ) from e


def format_report_date(day: date) -> str:
    """Long-form date, e.g. "January 5, 2024"."""
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def display_label(field_name: str) -> str:
    return " ".join(word.capitalize() for word in field_name.split("_") if word)


def display_value(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_report_content(
    payload: Union[ReportPayload, Mapping[str, Any], None],
    report_date: Optional[date] = None,
) -> ReportContent:
    """Assemble the ordered report sections for a scenario."""
    payload = build_payload(payload)
    inputs, results = payload.inputs, payload.results
    report_date = report_date or date.today()

    if results.roi_percentage == INFINITE_ROI:
        roi_display = INFINITE_ROI
    else:
        roi_display = f"{results.roi_percentage}%"

    key_results = (
        ReportField("Monthly Savings", f"${results.monthly_savings}"),
        ReportField("Payback Period", f"{results.payback_months} months"),
        ReportField(
            f"Net Savings ({inputs.time_horizon_months} months)",
            f"${results.net_savings}",
        ),
        ReportField("Return on Investment (ROI)", roi_display),
    )
    inputs_used = tuple(
        ReportField(display_label(name), display_value(value))
        for name, value in inputs.model_dump().items()
    )

    return ReportContent(
        title=REPORT_TITLE,
        generated_on=format_report_date(report_date),
        scenario_name=inputs.scenario_name,
        sections=(
            ReportSection(KEY_RESULTS_HEADING, key_results),
            ReportSection(INPUTS_HEADING, inputs_used),
        ),
    )
