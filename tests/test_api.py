"""Tests for the FastAPI routes."""

from __future__ import annotations

import json
from unittest.mock import patch

from fastapi.testclient import TestClient

from trip_wizard.api import app
from trip_wizard.llm import LLMConfigurationError
from trip_wizard.models import LocationSuggestion, TripItinerary
from trip_wizard.planner import coerce_recommendations

client = TestClient(app)


def _payload(**overrides):
    data = {
        "trip_goal": "need_recommendation",
        "comfort_level": "medium",
        "trip_type": "domestic",
        "number_of_people": 2,
        "includes_flights": False,
        "budget_amount": 10000,
        "currency": "INR",
        "emotional_goals": ["relaxation"],
        "excitement_focus": ["food"],
        "setting_preference": ["beaches"],
        "startDate": "2025-06-10",
        "endDate": "2025-06-13",
        "location": "Mumbai, India",
        "companions": "Couple",
    }
    data.update(overrides)
    return data


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_estimate_budget_returns_assessment():
    response = client.post("/api/estimate-budget", json=_payload())
    assert response.status_code == 200
    body = response.json()
    assert body["reference_range"] == {"low": 8752, "high": 24531}
    assert body["status"] == "within"
    assert body["parameters"]["days"] == 3


def test_cross_field_validation_returns_field_path():
    response = client.post("/api/estimate-budget", json=_payload(endDate="2025-06-09"))
    assert response.status_code == 400
    assert response.json() == {"message": "End date must be after start date", "field": "end_date"}


def test_schema_validation_returns_400():
    payload = _payload()
    del payload["location"]
    response = client.post("/api/estimate-budget", json=payload)
    assert response.status_code == 400
    assert response.json()["field"] == "location"


def test_non_finite_budget_is_rejected():
    response = client.post(
        "/api/estimate-budget",
        content=json.dumps(_payload(budget_amount=float("nan"))),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["field"] == "budget_amount"


@patch("trip_wizard.workflow.recommend_destinations")
def test_recommend_destinations_route(mock_recommend):
    def fake(request, assessment):
        return coerce_recommendations({"options": []}, assessment)

    mock_recommend.side_effect = fake
    response = client.post("/api/recommend-destinations", json=_payload())
    assert response.status_code == 200
    body = response.json()
    assert len(body["options"]) == 3
    assert body["budget"]["status"] == "within"


def test_blocked_budget_returns_422():
    response = client.post("/api/recommend-destinations", json=_payload(budget_amount=1000))
    assert response.status_code == 422
    body = response.json()
    assert body["field"] == "budget_amount"
    assert body["budget"]["can_proceed"] is False


@patch("trip_wizard.workflow.generate_itinerary")
def test_generate_itinerary_route(mock_generate):
    mock_generate.return_value = TripItinerary(trip_theme="Coastal Calm", destination="Goa, India")
    response = client.post(
        "/api/generate-itinerary",
        json=_payload(trip_goal="know_destination", destination_location="Goa, India"),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["trip_theme"] == "Coastal Calm"
    assert body["packing_list"]["clothes"] == {"tops": 0, "bottoms": 0, "outerwear": 0}


@patch("trip_wizard.workflow.generate_itinerary", side_effect=LLMConfigurationError("OpenAI API key is missing."))
def test_missing_llm_configuration_returns_500(_mock_generate):
    response = client.post(
        "/api/generate-itinerary",
        json=_payload(trip_goal="know_destination", destination_location="Goa, India"),
    )
    assert response.status_code == 500
    assert response.json() == {"message": "OpenAI API key is missing."}


@patch("trip_wizard.api.suggest_locations")
def test_location_suggestions_route(mock_suggest):
    mock_suggest.return_value = [
        LocationSuggestion(city="Pune", country="India", display_name="Pune, India", currency="INR")
    ]
    response = client.get("/api/location-suggestions", params={"query": "Pun"})
    assert response.json() == {
        "suggestions": [{"city": "Pune", "country": "India", "displayName": "Pune, India", "currency": "INR"}]
    }
    mock_suggest.assert_called_once_with("Pun")
