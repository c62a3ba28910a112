"""Budget-feasibility heuristics run before any itinerary generation.

Every function here is pure and total: unknown countries, regions or
currencies fall back to neutral multipliers instead of raising.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Optional

from .locations import country_from_location, region_from_country
from .models import BudgetAssessment, BudgetRange, TripParameters
from .reference_data import ReferenceTables, get_reference_tables


logger = logging.getLogger(__name__)

# (low, high) bands in the reference currency
DOMESTIC_PER_DAY = (1200, 3500)
DOMESTIC_FIXED = (3000, 8000)
INTERNATIONAL_PER_DAY = (4500, 12000)
INTERNATIONAL_FIXED = (30000, 70000)

REGION_MULTIPLIERS = MappingProxyType(
    {
        "asia": 0.95,
        "europe": 1.15,
        "north_america": 1.25,
        "latin_america": 1.0,
        "middle_east": 1.1,
        "africa": 1.0,
        "oceania": 1.2,
        "global": 1.1,
    }
)
UNKNOWN_REGION_MULTIPLIER = 1.1

CURRENCY_STRENGTH_MULTIPLIERS = MappingProxyType({"strong": 0.9, "medium": 1.0, "weak": 1.1})
COMFORT_MULTIPLIERS = MappingProxyType({"low": 0.85, "medium": 1.0, "premium": 1.35})
FLIGHTS_EXCLUDED_MULTIPLIER = 0.78
SHORT_HAUL_HOURS = 6
LONG_HAUL_HOURS = 12

# A budget this close to the low bound may still proceed when flights are excluded.
PROCEED_ANYWAY_RATIO = 0.75


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _currency_code(currency: Optional[str]) -> str:
    return (currency or "").strip().upper()


def reference_rate(currency: Optional[str], tables: Optional[ReferenceTables] = None) -> float:
    tables = tables or get_reference_tables()
    profile = tables.currencies.get(_currency_code(currency))
    if profile is None or profile.rate <= 0:
        return 1.0
    return profile.rate


def currency_strength(currency: Optional[str], tables: Optional[ReferenceTables] = None) -> str:
    tables = tables or get_reference_tables()
    profile = tables.currencies.get(_currency_code(currency))
    return profile.strength if profile else "medium"


def convert_from_reference(amount: float, currency: Optional[str], tables: Optional[ReferenceTables] = None) -> float:
    return amount / reference_rate(currency, tables)


def convert_to_reference(amount: float, currency: Optional[str], tables: Optional[ReferenceTables] = None) -> float:
    return amount * reference_rate(currency, tables)


def travelers_for(
    number_of_people: Optional[int],
    companions: Optional[str] = None,
    tables: Optional[ReferenceTables] = None,
) -> int:
    if number_of_people and number_of_people >= 1:
        return int(number_of_people)
    tables = tables or get_reference_tables()
    return tables.companion_travelers.get(companions or "", 1)


def _geo_multiplier(trip_type: str, origin_country: Optional[str], tables: ReferenceTables) -> float:
    if trip_type == "domestic":
        profile = tables.countries.get(origin_country or "")
        return profile.domestic_multiplier if profile else 1.0
    region = region_from_country(origin_country, tables)
    return REGION_MULTIPLIERS.get(region, UNKNOWN_REGION_MULTIPLIER)


def _flight_duration_multiplier(trip_type: str, max_flight_hours: Optional[float]) -> float:
    if trip_type != "international" or not max_flight_hours:
        return 1.0
    if max_flight_hours <= SHORT_HAUL_HOURS:
        return 0.9
    if max_flight_hours >= LONG_HAUL_HOURS:
        return 1.1
    return 1.0


def estimate_budget_range(
    days: int,
    travelers: int,
    trip_type: str,
    currency: Optional[str],
    start_location: Optional[str],
    comfort_level: Optional[str],
    includes_flights: bool,
    max_flight_hours: Optional[float] = None,
    tables: Optional[ReferenceTables] = None,
) -> BudgetRange:
    """Estimate the total spend for the trip in the reference currency."""

    tables = tables or get_reference_tables()
    days = max(int(days or 1), 1)
    travelers = max(int(travelers or 1), 1)
    international = trip_type == "international"

    if international:
        per_day, fixed = INTERNATIONAL_PER_DAY, INTERNATIONAL_FIXED
    else:
        per_day, fixed = DOMESTIC_PER_DAY, DOMESTIC_FIXED
    base_low = travelers * (days * per_day[0] + fixed[0])
    base_high = travelers * (days * per_day[1] + fixed[1])

    origin_country = country_from_location(start_location, tables)
    geo = _geo_multiplier(trip_type, origin_country, tables)
    strength = CURRENCY_STRENGTH_MULTIPLIERS.get(currency_strength(currency, tables), 1.0) if international else 1.0
    comfort = COMFORT_MULTIPLIERS.get(comfort_level or "medium", 1.0)
    flights = 1.0 if includes_flights else FLIGHTS_EXCLUDED_MULTIPLIER
    duration = _flight_duration_multiplier(trip_type, max_flight_hours)

    factor = geo * strength * comfort * flights * duration
    low = _round_half_up(base_low * factor)
    high = _round_half_up(base_high * factor)
    return BudgetRange(low=min(low, high), high=max(low, high))


def derive_budget_tier(budget_in_reference: float, budget_range: BudgetRange) -> str:
    if budget_in_reference < budget_range.low:
        return "low"
    if budget_in_reference > budget_range.high:
        return "premium"
    return "medium"


def budget_guidance(
    trip_type: str,
    strength: str,
    origin_country: Optional[str] = None,
    tables: Optional[ReferenceTables] = None,
) -> str:
    if trip_type == "domestic":
        return (
            "Travelling off-peak and using rail or budget carriers within the country "
            "keeps a domestic trip comfortably inside this range."
        )
    if strength == "weak":
        tables = tables or get_reference_tables()
        nearby = tables.nearby_value_destinations.get(origin_country or "")
        if nearby:
            return (
                "Your currency stretches further close to home. Consider value destinations "
                f"such as {', '.join(nearby)}."
            )
        return "Your currency stretches further close to home. Consider nearby value destinations in your region."
    if strength == "strong":
        return "Your currency is strong abroad, so premium stays and long-haul options are realistic."
    return "Balance a couple of splurge experiences with value stays to get the most from this budget."


def assess_budget(parameters: TripParameters, tables: Optional[ReferenceTables] = None) -> BudgetAssessment:
    """Estimate the recommended range and classify the stated budget against it."""

    tables = tables or get_reference_tables()
    origin_country = country_from_location(parameters.start_location, tables)
    origin_region = region_from_country(origin_country, tables)
    reference_range = estimate_budget_range(
        days=parameters.days,
        travelers=parameters.number_of_people,
        trip_type=parameters.trip_type,
        currency=parameters.currency,
        start_location=parameters.start_location,
        comfort_level=parameters.comfort_level,
        includes_flights=parameters.includes_flights,
        max_flight_hours=parameters.max_flight_hours,
        tables=tables,
    )
    local_range = BudgetRange(
        low=_round_half_up(convert_from_reference(reference_range.low, parameters.currency, tables)),
        high=_round_half_up(convert_from_reference(reference_range.high, parameters.currency, tables)),
    )
    budget_in_reference = convert_to_reference(parameters.budget_amount, parameters.currency, tables)
    tier = derive_budget_tier(budget_in_reference, reference_range)
    strength = currency_strength(parameters.currency, tables)

    if tier == "low":
        status = "below"
    elif tier == "premium":
        status = "above"
    else:
        status = "within"

    warning = None
    can_proceed = True
    if status == "below":
        warning = (
            f"A budget of {parameters.budget_amount:,.0f} {parameters.currency} looks insufficient "
            f"for this trip. We recommend {local_range.low:,}-{local_range.high:,} {parameters.currency}."
        )
        can_proceed = (
            budget_in_reference >= PROCEED_ANYWAY_RATIO * reference_range.low
            and not parameters.includes_flights
        )
        logger.info(
            "Budget below range (%.0f < %d reference); can_proceed=%s",
            budget_in_reference,
            reference_range.low,
            can_proceed,
        )

    recommended = parameters.comfort_level if parameters.comfort_overridden else tier
    return BudgetAssessment(
        parameters=parameters,
        origin_country=origin_country,
        origin_region=origin_region,
        reference_range=reference_range,
        local_range=local_range,
        budget_in_reference=budget_in_reference,
        status=status,
        budget_tier=tier,
        recommended_comfort_level=recommended,
        currency_strength=strength,
        guidance=budget_guidance(parameters.trip_type, strength, origin_country, tables),
        can_proceed=can_proceed,
        warning=warning,
    )
