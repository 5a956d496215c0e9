"""Pydantic models for scenario inputs, derived results and persisted records."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScenarioInput(BaseModel):
    """A business's manual invoice-processing metrics.

    Validation is strict: numeric strings and booleans are rejected rather
    than coerced, and NaN/inf never get through.
    """

    model_config = ConfigDict(strict=True, frozen=True, allow_inf_nan=False)

    scenario_name: str = Field(min_length=1)
    monthly_invoice_volume: float = Field(ge=0)
    num_ap_staff: float = Field(ge=0)
    avg_hours_per_invoice: float = Field(ge=0)
    hourly_wage: float = Field(ge=0)
    error_rate_manual: float = Field(ge=0, description="Percentage, 0.5 means 0.5%")
    error_cost: float = Field(ge=0)
    time_horizon_months: int = Field(gt=0)
    one_time_implementation_cost: float = Field(default=0.0, ge=0)

    @field_validator("scenario_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("scenario_name cannot be blank")
        return v

    @field_validator("one_time_implementation_cost", mode="before")
    @classmethod
    def falsy_cost_is_zero(cls, v: Any) -> Any:
        # null, 0, "" and false all mean "no upfront cost"
        if not v:
            return 0.0
        return v


class ScenarioResult(BaseModel):
    """Derived figures, already formatted as fixed-decimal text."""

    model_config = ConfigDict(strict=True, frozen=True)

    monthly_savings: str = Field(min_length=1)
    net_savings: str = Field(min_length=1)
    payback_months: str = Field(min_length=1)
    roi_percentage: str = Field(min_length=1)


class ScenarioSummary(BaseModel):
    """One row of the saved-scenario listing."""

    model_config = ConfigDict(frozen=True)

    id: int
    scenario_name: str
    created_at: datetime


class ScenarioRecord(ScenarioSummary):
    """A persisted snapshot of a scenario and its results."""

    input_data: ScenarioInput
    result_data: ScenarioResult


class ReportPayload(BaseModel):
    """The ``{inputs, results}`` pair a report is rendered from."""

    model_config = ConfigDict(frozen=True)

    inputs: ScenarioInput
    results: ScenarioResult
