"""Prompt construction and LLM-backed itinerary / destination generation."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from .models import (
    BudgetAssessment,
    DayPlan,
    DestinationMetrics,
    DestinationOption,
    DestinationRecommendations,
    PackingList,
    TripItinerary,
    TripRequest,
)
from .llm import llm_json_call
from .reference_data import get_reference_tables
from .utils import format_friendly_date, truncate_summary


logger = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 3
ENERGY_LEVELS = ("low", "medium", "high")
METRIC_FIELDS = ("vibe_fit", "affordability", "travel_convenience", "safety_accessibility", "total_score")

ITINERARY_SCHEMA = """{
  "trip_theme": "",
  "destination": "",
  "why_it_matches_you": [],
  "daily_itinerary": [
    {
      "day": 1,
      "energy_level": "low | medium | high",
      "plan": {
        "morning": "TIMED PLAN (e.g., 09:00 AM - Activity...)",
        "afternoon": "TIMED PLAN (e.g., 01:00 PM - Activity...)",
        "evening": "TIMED PLAN (e.g., 07:00 PM - Activity...)"
      }
    }
  ],
  "packing_list": {
    "clothes": {"tops": 0, "bottoms": 0, "outerwear": 0},
    "shoes": [],
    "accessories": [],
    "misc": []
  },
  "documents": []
}"""

RECOMMENDATION_SCHEMA = """{
  "options": [
    {
      "destination": "",
      "country": "",
      "summary": "",
      "estimated_budget": {"low": 0, "high": 0, "currency": ""},
      "metrics": {
        "vibe_fit": 1,
        "affordability": 1,
        "travel_convenience": 1,
        "safety_accessibility": 1,
        "total_score": 1
      }
    }
  ]
}"""


def _humanize(value: Optional[str]) -> str:
    return (value or "").replace("_", " ")


def _senior_guidance(request: TripRequest) -> str:
    if request.companions != "Senior Citizens":
        return ""
    return """
Additional constraints for senior travelers:
- Prioritize senior-friendly destinations with strong accessibility infrastructure.
- Prefer minimal walking distances, lower physical strain, and frequent rest breaks.
- Avoid late-night, high-risk, and physically intensive activities.
- Recommend accessible transportation and accommodation options.
- Include practical health/safety and mobility considerations in the itinerary.
"""


def _trip_type_guidance(request: TripRequest) -> str:
    if request.trip_type == "domestic":
        return """
Trip type requirement:
- User wants a domestic trip.
- Destination MUST be inside the same country as the starting location.
"""
    return """
Trip type requirement:
- User wants an international trip.
- Destination MUST be outside the starting location country.
- Prefer geographically closer regions from the starting location before long-haul options, unless budget clearly supports long-haul.
- Since user is a citizen of the starting location country, include relevant visa/entry reminders.
"""


def _flight_guidance(request: TripRequest) -> str:
    if not request.includes_flights:
        return "Flights are NOT included in the stated budget."
    if request.max_flight_hours:
        return f"Flights are included in the budget; keep one-way flights under {request.max_flight_hours:g} hours."
    return "Flights are included in the budget."


def _nearby_value_text(origin_country: Optional[str]) -> str:
    nearby = get_reference_tables().nearby_value_destinations.get(origin_country or "")
    if nearby:
        return ", ".join(nearby)
    return "nearby value destinations in the same broad region"


def build_preferences_block(request: TripRequest, assessment: BudgetAssessment) -> str:
    params = assessment.parameters
    currency = params.currency
    return f"""User preferences:
Planning mode: {_humanize(request.trip_goal)}
Experience level: {assessment.recommended_comfort_level}
Emotional goals: {", ".join(_humanize(g) for g in request.emotional_goals)}
Daily pace: {_humanize(request.daily_pace)}
Excitement focus: {", ".join(_humanize(f) for f in request.excitement_focus)}
Preferred settings: {", ".join(_humanize(s) for s in request.setting_preference)}
Appetite for discomfort: {_humanize(request.discomfort_appetite)}
Food personality: {_humanize(request.food_personality)}
Social vibe: {_humanize(request.social_vibe)}
Budget mindset: {_humanize(request.budget_mindset)}
Past trip loved: {request.past_trip_loved or "Not provided"}
Budget amount: {params.budget_amount:,.0f} {currency}
Budget currency strength: {assessment.currency_strength}
Estimated realistic budget range: {assessment.local_range.low:,}-{assessment.local_range.high:,} {currency}
Travel dates: {format_friendly_date(params.start_date)} to {format_friendly_date(params.end_date)} ({params.days} days)
Starting location: {params.start_location}
Destination: {params.destination_location or "Not decided"}
Trip type selected: {params.trip_type}
Assume the traveler is a citizen of the country in the starting location.
Detected origin country: {assessment.origin_country or "Unknown"}
Nearby value destinations from this origin: {_nearby_value_text(assessment.origin_country)}
Traveling with: {request.companions} ({params.number_of_people} people)
{_flight_guidance(request)}"""


def build_itinerary_prompt(request: TripRequest, assessment: BudgetAssessment) -> str:
    params = assessment.parameters
    destination_rule = (
        f"The destination is fixed: {params.destination_location}."
        if params.destination_location
        else "Pick ONE destination that fits the preferences for the given dates and budget."
    )
    return f"""
You are a travel planner AI that designs trips based on personality and vibe.

{build_preferences_block(request, assessment)}

Generate a personalized travel plan.

Requirements:
{destination_rule}
Create a trip theme name.
Create exactly {params.days} days in daily_itinerary and match daily energy levels to the pace.
Include a realistic packing list.
Add general document reminders (passport, ID, visas if international).
Each itinerary item MUST include a specific time (e.g., "09:00 AM", "02:30 PM").
Use the selected budget currency strength when deciding destination affordability.
If budget currency is weak, bias toward better-value destinations and cost-efficient routing.
If budget currency is strong, wider destination options are acceptable but still stay realistic.
Do not assume proximity to any specific country solely from the chosen currency; use starting location geography and trip type first.
{_senior_guidance(request)}
{_trip_type_guidance(request)}

Respond ONLY in valid JSON using the following schema:
{ITINERARY_SCHEMA}

Do NOT include explanations or markdown.
"""


def build_recommendation_prompt(request: TripRequest, assessment: BudgetAssessment) -> str:
    return f"""
You are a travel planner AI recommending destinations based on personality and vibe.

{build_preferences_block(request, assessment)}

Recommend exactly {RECOMMENDATION_COUNT} destinations ranked best first.

Requirements:
Each option needs a one or two sentence summary of why it fits.
estimated_budget is the total trip cost for the whole group in {assessment.parameters.currency}.
Score vibe_fit, affordability, travel_convenience and safety_accessibility from 1 to 10.
total_score is the overall fit from 1 to 10.
{_senior_guidance(request)}
{_trip_type_guidance(request)}

Respond ONLY in valid JSON using the following schema:
{RECOMMENDATION_SCHEMA}

Do NOT include explanations or markdown.
"""


def _as_str(value: Any, default: str = "") -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _as_number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.replace(",", "").strip()
    elif not isinstance(value, (int, float)):
        return default
    try:
        result = float(value)
    except (ValueError, OverflowError):
        return default
    # NaN and infinities cannot become day numbers, counts or amounts.
    return result if math.isfinite(result) else default


def _clamp_score(value: Any) -> float:
    return min(max(_as_number(value, 1.0), 1.0), 10.0)


def _default_day(day: int) -> DayPlan:
    return DayPlan(
        day=day,
        energy_level="medium",
        morning="Free time to explore.",
        afternoon="Free time to explore.",
        evening="Relaxed dinner nearby.",
    )


def coerce_itinerary(data: Dict[str, Any], request: TripRequest, assessment: BudgetAssessment) -> TripItinerary:
    """Build a TripItinerary from possibly partial model output.

    The result always holds one entry per trip day, numbered from 1. Days the
    model skipped or garbled get a relaxed default plan; days past the end of
    the trip are dropped.
    """

    fallback_destination = assessment.parameters.destination_location or "Destination to be confirmed"
    total_days = max(assessment.parameters.days, 1)
    parsed: Dict[int, DayPlan] = {}
    raw_days = data.get("daily_itinerary")
    for idx, item in enumerate(raw_days if isinstance(raw_days, list) else [], start=1):
        if not isinstance(item, dict):
            continue
        plan = item.get("plan") if isinstance(item.get("plan"), dict) else {}
        energy = _as_str(item.get("energy_level"), "medium").lower()
        day_number = _as_number(item.get("day"), idx)
        day = int(day_number) if day_number >= 1 else idx
        if day > total_days or day in parsed:
            continue
        parsed[day] = DayPlan(
            day=day,
            energy_level=energy if energy in ENERGY_LEVELS else "medium",
            morning=_as_str(plan.get("morning"), "Free time to explore."),
            afternoon=_as_str(plan.get("afternoon"), "Free time to explore."),
            evening=_as_str(plan.get("evening"), "Relaxed dinner nearby."),
        )
    if len(parsed) < total_days:
        logger.warning("Itinerary response covered %d of %d days; filling the rest", len(parsed), total_days)
    days = [parsed.get(day) or _default_day(day) for day in range(1, total_days + 1)]

    raw_packing = data.get("packing_list") if isinstance(data.get("packing_list"), dict) else {}
    clothes = raw_packing.get("clothes") if isinstance(raw_packing.get("clothes"), dict) else {}
    packing = PackingList(
        tops=max(int(_as_number(clothes.get("tops"))), 0),
        bottoms=max(int(_as_number(clothes.get("bottoms"))), 0),
        outerwear=max(int(_as_number(clothes.get("outerwear"))), 0),
        shoes=_as_str_list(raw_packing.get("shoes")),
        accessories=_as_str_list(raw_packing.get("accessories")),
        misc=_as_str_list(raw_packing.get("misc")),
    )

    documents = _as_str_list(data.get("documents"))
    if not documents:
        documents = ["Government-issued photo ID"]
        if request.trip_type == "international":
            documents = ["Passport with at least six months validity", "Visa or entry authorization if required"]

    return TripItinerary(
        trip_theme=_as_str(data.get("trip_theme"), "Your Personalized Escape"),
        destination=_as_str(data.get("destination"), fallback_destination),
        why_it_matches_you=_as_str_list(data.get("why_it_matches_you")),
        daily_itinerary=days,
        packing_list=packing,
        documents=documents,
    )


def _coerce_option(item: Dict[str, Any], assessment: BudgetAssessment) -> Optional[DestinationOption]:
    destination = _as_str(item.get("destination"))
    if not destination:
        return None
    budget = item.get("estimated_budget") if isinstance(item.get("estimated_budget"), dict) else {}
    currency = _as_str(budget.get("currency"), assessment.parameters.currency)
    low = _as_number(budget.get("low"), float(assessment.local_range.low))
    high = _as_number(budget.get("high"), float(assessment.local_range.high))
    low, high = min(low, high), max(low, high)
    metrics = item.get("metrics") if isinstance(item.get("metrics"), dict) else {}
    scores = {name: _clamp_score(metrics.get(name)) for name in METRIC_FIELDS}
    if "total_score" not in metrics:
        parts = [scores[name] for name in METRIC_FIELDS[:-1]]
        scores["total_score"] = round(sum(parts) / len(parts), 1)
    return DestinationOption(
        destination=destination,
        country=_as_str(item.get("country"), destination),
        summary=truncate_summary(_as_str(item.get("summary"), f"{destination} fits your travel style.")),
        budget_low=int(round(low)),
        budget_high=int(round(high)),
        budget_currency=currency,
        metrics=DestinationMetrics(**scores),
    )


def _placeholder_option(index: int, assessment: BudgetAssessment) -> DestinationOption:
    # Shown only when the model returned fewer than three usable options.
    nearby = get_reference_tables().nearby_value_destinations.get(assessment.origin_country or "", ())
    destination = nearby[index] if index < len(nearby) else f"Alternative destination {index + 1}"
    return DestinationOption(
        destination=destination,
        country=destination,
        summary="Suggested as a nearby value alternative for your budget.",
        budget_low=assessment.local_range.low,
        budget_high=assessment.local_range.high,
        budget_currency=assessment.parameters.currency,
        metrics=DestinationMetrics(
            vibe_fit=5.0,
            affordability=5.0,
            travel_convenience=5.0,
            safety_accessibility=5.0,
            total_score=5.0,
        ),
    )


def coerce_recommendations(data: Dict[str, Any], assessment: BudgetAssessment) -> DestinationRecommendations:
    """Return exactly three options ranked by total score."""

    raw_options = data.get("options")
    options: List[DestinationOption] = []
    for item in raw_options if isinstance(raw_options, list) else []:
        if not isinstance(item, dict):
            continue
        option = _coerce_option(item, assessment)
        if option and all(o.destination != option.destination for o in options):
            options.append(option)
    options.sort(key=lambda o: o.metrics.total_score, reverse=True)
    options = options[:RECOMMENDATION_COUNT]
    if len(options) < RECOMMENDATION_COUNT:
        logger.warning("Model returned %d usable destination option(s); padding", len(options))
        taken = {o.destination for o in options}
        index = 0
        while len(options) < RECOMMENDATION_COUNT:
            candidate = _placeholder_option(index, assessment)
            index += 1
            if candidate.destination not in taken:
                taken.add(candidate.destination)
                options.append(candidate)
        options.sort(key=lambda o: o.metrics.total_score, reverse=True)
    return DestinationRecommendations(options=options)


def generate_itinerary(request: TripRequest, assessment: BudgetAssessment) -> TripItinerary:
    logger.info(
        "Generating %d-day itinerary from %s",
        assessment.parameters.days,
        assessment.origin_country or "unknown origin",
    )
    data = llm_json_call(build_itinerary_prompt(request, assessment))
    return coerce_itinerary(data, request, assessment)


def recommend_destinations(request: TripRequest, assessment: BudgetAssessment) -> DestinationRecommendations:
    logger.info("Requesting %d destination recommendations", RECOMMENDATION_COUNT)
    data = llm_json_call(build_recommendation_prompt(request, assessment))
    return coerce_recommendations(data, assessment)
