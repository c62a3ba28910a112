"""Trip planning wizard: budget heuristics and LLM-backed itineraries."""

from .budget import (
    assess_budget,
    convert_from_reference,
    convert_to_reference,
    derive_budget_tier,
    estimate_budget_range,
)
from .locations import country_from_location, normalize_country_name, region_from_country
from .models import BudgetRange, TripParameters, TripRequest
from .validation import TripValidationError, validate_trip_request
from .workflow import run_planner, summarize_response

__all__ = [
    "BudgetRange",
    "TripParameters",
    "TripRequest",
    "TripValidationError",
    "assess_budget",
    "convert_from_reference",
    "convert_to_reference",
    "country_from_location",
    "derive_budget_tier",
    "estimate_budget_range",
    "normalize_country_name",
    "region_from_country",
    "run_planner",
    "summarize_response",
    "validate_trip_request",
]
