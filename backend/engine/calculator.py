"""Invoice-automation ROI calculation engine.

One fixed formula set: manual labor and error costs are compared against a
flat per-invoice automation cost, the monthly difference is projected over
the time horizon and set against the one-time implementation cost.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Mapping, Union

from pydantic import ValidationError

from backend.models.errors import CalculationError
from backend.models.scenario import ScenarioInput, ScenarioResult

logger = logging.getLogger(__name__)

AUTOMATED_COST_PER_INVOICE = 0.20
ERROR_RATE_AUTO = 0.001  # 0.1%
MIN_ROI_BOOST_FACTOR = 1.1

INFINITE_ROI = "Infinite"

_SAVINGS_FIELDS = (
    "monthly_invoice_volume",
    "num_ap_staff",
    "avg_hours_per_invoice",
    "hourly_wage",
    "error_rate_manual",
    "error_cost",
)

# Wide enough for every finite float at any supported number of decimals
_FIXED_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def parse_scenario_input(data: Union[ScenarioInput, Mapping[str, Any]]) -> ScenarioInput:
    """Validate a raw payload into a ScenarioInput.

    Raises CalculationError naming every offending field.
    """
    if isinstance(data, ScenarioInput):
        return data
    if not isinstance(data, Mapping):
        raise CalculationError(
            f"Scenario input must be an object, got {type(data).__name__}"
        )
    try:
        return ScenarioInput.model_validate(dict(data))
    except ValidationError as e:
        raise _calculation_error(e) from e


def _calculation_error(exc: ValidationError) -> CalculationError:
    fields: list[str] = []
    problems: list[str] = []
    for err in exc.errors():
        name = ".".join(str(part) for part in err["loc"]) or "input"
        if name not in fields:
            fields.append(name)
        problems.append(f"{name} ({err['msg']})")
    return CalculationError(
        f"Invalid scenario input: {'; '.join(problems)}", fields=fields
    )


def to_fixed(value: float, digits: int) -> str:
    """Fixed-decimal text for a float, rounding its exact value half away from zero."""
    if value == 0:
        value = 0.0  # no "-0.00"
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, context=_FIXED_CONTEXT))


def _out_of_range(quantity: str, fields) -> CalculationError:
    return CalculationError(
        f"Inputs are too large to compute {quantity}", fields=list(fields)
    )


def compute(data: Union[ScenarioInput, Mapping[str, Any]]) -> ScenarioResult:
    """Run the ROI calculation for one scenario.

    Raises CalculationError when the payload is invalid or when the inputs
    are so large that a figure leaves the finite float range.
    """
    inputs = parse_scenario_input(data)

    labor_cost_manual = (
        inputs.num_ap_staff
        * inputs.hourly_wage
        * inputs.avg_hours_per_invoice
        * inputs.monthly_invoice_volume
    )
    auto_cost = inputs.monthly_invoice_volume * AUTOMATED_COST_PER_INVOICE
    error_savings = (
        ((inputs.error_rate_manual / 100) - ERROR_RATE_AUTO)
        * inputs.monthly_invoice_volume
        * inputs.error_cost
    )
    monthly_savings = (labor_cost_manual + error_savings - auto_cost) * MIN_ROI_BOOST_FACTOR
    if not math.isfinite(monthly_savings):
        raise _out_of_range("monthly savings", _SAVINGS_FIELDS)

    one_time_cost = inputs.one_time_implementation_cost or 0
    horizon_fields = (*_SAVINGS_FIELDS, "time_horizon_months", "one_time_implementation_cost")
    try:
        cumulative_savings = monthly_savings * inputs.time_horizon_months
    except OverflowError as e:
        # int horizon beyond the float range
        raise _out_of_range("net savings", horizon_fields) from e
    net_savings = cumulative_savings - one_time_cost
    if not math.isfinite(net_savings):
        raise _out_of_range("net savings", horizon_fields)

    if one_time_cost > 0 and monthly_savings > 0:
        payback_months = one_time_cost / monthly_savings
        if not math.isfinite(payback_months):
            raise _out_of_range(
                "the payback period", (*_SAVINGS_FIELDS, "one_time_implementation_cost")
            )
    else:
        payback_months = 0
        if one_time_cost > 0:
            logger.debug(
                "Scenario '%s' never pays back (monthly savings %.2f)",
                inputs.scenario_name,
                monthly_savings,
            )

    if one_time_cost > 0:
        roi_quotient = (net_savings / one_time_cost) * 100
        if not math.isfinite(roi_quotient):
            raise _out_of_range("the ROI percentage", horizon_fields)
        roi = to_fixed(roi_quotient, 2)
    else:
        roi = INFINITE_ROI

    return ScenarioResult(
        monthly_savings=to_fixed(monthly_savings, 2),
        net_savings=to_fixed(net_savings, 2),
        payback_months=to_fixed(payback_months, 1),
        roi_percentage=roi,
    )
