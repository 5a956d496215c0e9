from .calculator import (
    AUTOMATED_COST_PER_INVOICE,
    ERROR_RATE_AUTO,
    INFINITE_ROI,
    MIN_ROI_BOOST_FACTOR,
    compute,
    parse_scenario_input,
)

__all__ = [
    "AUTOMATED_COST_PER_INVOICE",
    "ERROR_RATE_AUTO",
    "MIN_ROI_BOOST_FACTOR",
    "INFINITE_ROI",
    "compute",
    "parse_scenario_input",
]
