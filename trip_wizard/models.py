"""Core data models for the trip wizard."""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any


@dataclass
class TripRequest:
    trip_goal: str
    comfort_level: str
    trip_type: str
    number_of_people: int
    includes_flights: bool
    budget_amount: float
    currency: str
    start_date: str
    end_date: str
    location: str
    companions: str
    max_flight_hours: Optional[float] = None
    destination_location: Optional[str] = None
    emotional_goals: List[str] = field(default_factory=list)
    daily_pace: str = "balanced"
    excitement_focus: List[str] = field(default_factory=list)
    setting_preference: List[str] = field(default_factory=list)
    discomfort_appetite: str = "some_novelty"
    food_personality: str = "local_street_food"
    social_vibe: str = "romantic_couple"
    budget_mindset: str = "balanced"
    past_trip_loved: Optional[str] = None
    comfort_overridden: bool = False


@dataclass(frozen=True)
class TripParameters:
    trip_type: str
    number_of_people: int
    includes_flights: bool
    budget_amount: float
    currency: str
    comfort_level: str
    start_location: str
    start_date: str
    end_date: str
    days: int
    destination_location: Optional[str] = None
    max_flight_hours: Optional[float] = None
    comfort_overridden: bool = False


@dataclass(frozen=True)
class BudgetRange:
    low: int
    high: int


@dataclass(frozen=True)
class CountryProfile:
    region: str
    currency: str
    domestic_multiplier: float = 1.0


@dataclass(frozen=True)
class CurrencyProfile:
    rate: float
    strength: str = "medium"


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str


@dataclass
class BudgetAssessment:
    parameters: TripParameters
    origin_country: Optional[str]
    origin_region: str
    reference_range: BudgetRange
    local_range: BudgetRange
    budget_in_reference: float
    status: str
    budget_tier: str
    recommended_comfort_level: str
    currency_strength: str
    guidance: str
    can_proceed: bool
    warning: Optional[str] = None


@dataclass
class DayPlan:
    day: int
    energy_level: str
    morning: str
    afternoon: str
    evening: str


@dataclass
class PackingList:
    tops: int = 0
    bottoms: int = 0
    outerwear: int = 0
    shoes: List[str] = field(default_factory=list)
    accessories: List[str] = field(default_factory=list)
    misc: List[str] = field(default_factory=list)


@dataclass
class TripItinerary:
    trip_theme: str
    destination: str
    why_it_matches_you: List[str] = field(default_factory=list)
    daily_itinerary: List[DayPlan] = field(default_factory=list)
    packing_list: PackingList = field(default_factory=PackingList)
    documents: List[str] = field(default_factory=list)


@dataclass
class DestinationMetrics:
    vibe_fit: float
    affordability: float
    travel_convenience: float
    safety_accessibility: float
    total_score: float


@dataclass
class DestinationOption:
    destination: str
    country: str
    summary: str
    budget_low: int
    budget_high: int
    budget_currency: str
    metrics: DestinationMetrics


@dataclass
class DestinationRecommendations:
    options: List[DestinationOption] = field(default_factory=list)


@dataclass
class LocationSuggestion:
    city: str
    country: str
    display_name: str
    currency: Optional[str] = None


def itinerary_to_dict(itinerary: TripItinerary) -> Dict[str, Any]:
    """Serialize an itinerary into the response shape the wizard expects."""

    return {
        "trip_theme": itinerary.trip_theme,
        "destination": itinerary.destination,
        "why_it_matches_you": list(itinerary.why_it_matches_you),
        "daily_itinerary": [
            {
                "day": day.day,
                "energy_level": day.energy_level,
                "plan": {
                    "morning": day.morning,
                    "afternoon": day.afternoon,
                    "evening": day.evening,
                },
            }
            for day in itinerary.daily_itinerary
        ],
        "packing_list": {
            "clothes": {
                "tops": itinerary.packing_list.tops,
                "bottoms": itinerary.packing_list.bottoms,
                "outerwear": itinerary.packing_list.outerwear,
            },
            "shoes": list(itinerary.packing_list.shoes),
            "accessories": list(itinerary.packing_list.accessories),
            "misc": list(itinerary.packing_list.misc),
        },
        "documents": list(itinerary.documents),
    }


def recommendations_to_dict(recommendations: DestinationRecommendations) -> Dict[str, Any]:
    return {
        "options": [
            {
                "destination": option.destination,
                "country": option.country,
                "summary": option.summary,
                "estimated_budget": {
                    "low": option.budget_low,
                    "high": option.budget_high,
                    "currency": option.budget_currency,
                },
                "metrics": asdict(option.metrics),
            }
            for option in recommendations.options
        ]
    }


def assessment_to_dict(assessment: BudgetAssessment) -> Dict[str, Any]:
    """Convenience helper for serializing budget assessments in APIs."""

    return asdict(assessment)
