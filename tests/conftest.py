"""Shared test fixtures for the ROI simulator test suite."""

from datetime import date

import pytest

from backend.models.scenario import ReportPayload, ScenarioInput, ScenarioResult


@pytest.fixture
def pilot_inputs() -> dict:
    """The "Q4 Pilot Projection" defaults from the simulator form.

    Worked through by hand:
    labor 3*30*0.17*2000 = 30600, automation 2000*0.20 = 400,
    error savings (0.005-0.001)*2000*100 = 800,
    monthly (30600+800-400)*1.1 = 34100,
    net 34100*36 - 50000 = 1177600, ROI 1177600/50000*100 = 2355.2.
    """
    return {
        "scenario_name": "Q4 Pilot Projection",
        "monthly_invoice_volume": 2000,
        "num_ap_staff": 3,
        "avg_hours_per_invoice": 0.17,
        "hourly_wage": 30,
        "error_rate_manual": 0.5,
        "error_cost": 100,
        "time_horizon_months": 36,
        "one_time_implementation_cost": 50000,
    }


@pytest.fixture
def pilot_input(pilot_inputs) -> ScenarioInput:
    return ScenarioInput.model_validate(pilot_inputs)


@pytest.fixture
def pilot_result() -> ScenarioResult:
    return ScenarioResult(
        monthly_savings="34100.00",
        net_savings="1177600.00",
        payback_months="1.5",
        roi_percentage="2355.20",
    )


@pytest.fixture
def report_payload(pilot_input, pilot_result) -> ReportPayload:
    return ReportPayload(inputs=pilot_input, results=pilot_result)


@pytest.fixture
def report_date() -> date:
    return date(2024, 1, 5)
