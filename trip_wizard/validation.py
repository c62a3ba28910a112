"""Validation of wizard submissions before any budget or LLM work."""

from __future__ import annotations

import math
from typing import List, Optional

from .models import TripParameters, TripRequest, ValidationIssue
from .utils import parse_iso_date, trip_days


TRIP_GOALS = ("need_recommendation", "know_destination")
COMFORT_LEVELS = ("low", "medium", "premium")
TRIP_TYPES = ("domestic", "international")
DAILY_PACES = ("slow_spontaneous", "balanced", "packed_high_energy")
SETTINGS = (
    "beaches",
    "mountains",
    "big_city",
    "small_charming_town",
    "countryside",
    "desert",
    "snowy_landscape",
)
DISCOMFORT_APPETITES = ("comfort_predictability", "some_novelty", "wild_adventure")
FOOD_PERSONALITIES = ("fine_dining", "local_street_food", "dietary_restrictions", "no_food_planning")
SOCIAL_VIBES = ("solo_reflective", "romantic_couple", "friends_fun", "meet_new_people", "family_focused")
BUDGET_MINDSETS = ("max_value", "balanced", "premium_comfort", "once_in_lifetime_splurge")


class TripValidationError(ValueError):
    """Raised when a trip request fails validation."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        first = issues[0]
        super().__init__(first.message)

    @property
    def field(self) -> str:
        return self.issues[0].field


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def validate_trip_request(request: TripRequest) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    def add(field: str, message: str) -> None:
        issues.append(ValidationIssue(field=field, message=message))

    if request.trip_goal not in TRIP_GOALS:
        add("trip_goal", "Please select how you want to plan your trip")
    if request.comfort_level not in COMFORT_LEVELS:
        add("comfort_level", "Please select experience level")
    if request.trip_type not in TRIP_TYPES:
        add("trip_type", "Please select domestic or international travel")
    if not isinstance(request.number_of_people, int) or request.number_of_people < 1:
        add("number_of_people", "Number of people is required")
    if request.max_flight_hours is not None and not (
        math.isfinite(request.max_flight_hours) and 1 <= request.max_flight_hours <= 24
    ):
        add("max_flight_hours", "Max flight duration must be between 1 and 24 hours")
    if not request.budget_amount or not math.isfinite(request.budget_amount) or request.budget_amount <= 0:
        add("budget_amount", "Budget amount is required")
    if _blank(request.currency):
        add("currency", "Currency is required")

    if not request.emotional_goals:
        add("emotional_goals", "Select at least 1 emotional goal")
    elif len(request.emotional_goals) > 2:
        add("emotional_goals", "Select up to 2 emotional goals")
    if request.daily_pace not in DAILY_PACES:
        add("daily_pace", "Please select your ideal daily pace")
    if not request.excitement_focus:
        add("excitement_focus", "Select at least 1 excitement focus")
    elif len(request.excitement_focus) > 3:
        add("excitement_focus", "Select up to 3 excitement focuses")
    if not request.setting_preference:
        add("setting_preference", "Select at least 1 preferred setting")
    elif len(request.setting_preference) > 2:
        add("setting_preference", "Select up to 2 preferred settings")
    elif any(setting not in SETTINGS for setting in request.setting_preference):
        add("setting_preference", "Unknown setting preference")
    if request.discomfort_appetite not in DISCOMFORT_APPETITES:
        add("discomfort_appetite", "Please select your comfort with discomfort")
    if request.food_personality not in FOOD_PERSONALITIES:
        add("food_personality", "Please select your food personality")
    if request.social_vibe not in SOCIAL_VIBES:
        add("social_vibe", "Please select your social vibe")
    if request.budget_mindset not in BUDGET_MINDSETS:
        add("budget_mindset", "Please select your budget mindset")

    if _blank(request.start_date):
        add("start_date", "Start date is required")
    if _blank(request.end_date):
        add("end_date", "End date is required")
    start = parse_iso_date(request.start_date)
    end = parse_iso_date(request.end_date)
    if start is None or end is None or end <= start:
        add("end_date", "End date must be after start date")

    if _blank(request.location):
        add("location", "Starting location is required")
    if _blank(request.companions):
        add("companions", "Travel setup is required")

    if request.trip_goal == "know_destination" and _blank(request.destination_location):
        add("destination_location", "Destination location is required")
    if request.companions == "Solo" and request.number_of_people != 1:
        add("number_of_people", "For Solo travel, number of people must be 1")
    if request.companions == "Couple" and request.number_of_people != 2:
        add("number_of_people", "For Couple travel, number of people must be 2")
    if request.includes_flights and request.trip_goal != "know_destination" and not request.max_flight_hours:
        add("max_flight_hours", "Max flight duration is required when flights are included")

    return issues


def ensure_valid_trip_request(request: TripRequest) -> None:
    issues = validate_trip_request(request)
    if issues:
        raise TripValidationError(issues)


def trip_parameters_from_request(request: TripRequest) -> TripParameters:
    """Derive the budget-relevant parameters from a validated request."""

    return TripParameters(
        trip_type=request.trip_type,
        number_of_people=request.number_of_people,
        includes_flights=request.includes_flights,
        budget_amount=float(request.budget_amount),
        currency=request.currency.strip(),
        comfort_level=request.comfort_level,
        start_location=request.location.strip(),
        start_date=request.start_date,
        end_date=request.end_date,
        days=trip_days(request.start_date, request.end_date),
        destination_location=(request.destination_location or "").strip() or None,
        max_flight_hours=request.max_flight_hours,
        comfort_overridden=request.comfort_overridden,
    )
