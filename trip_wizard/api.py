"""FastAPI application exposing the trip wizard."""

import logging
from typing import Any, Dict, List, Literal, Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import APIError
from pydantic import BaseModel, ConfigDict, Field

from .budget import assess_budget
from .config import get_settings
from .llm import LLMConfigurationError, LLMResponseError, describe_openai_error
from .models import TripRequest, assessment_to_dict
from .services.geocoding import suggest_locations
from .validation import TripValidationError, ensure_valid_trip_request, trip_parameters_from_request
from .workflow import run_planner, summarize_response


logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Trip Wizard", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class TripRequestPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    trip_goal: Literal["need_recommendation", "know_destination"]
    comfort_level: Literal["low", "medium", "premium"] = "medium"
    trip_type: Literal["domestic", "international"]
    number_of_people: int
    includes_flights: bool = False
    max_flight_hours: Optional[float] = Field(None, allow_inf_nan=False)
    budget_amount: float = Field(..., allow_inf_nan=False)
    currency: str
    emotional_goals: List[str] = Field(default_factory=list)
    daily_pace: str = "balanced"
    excitement_focus: List[str] = Field(default_factory=list)
    setting_preference: List[str] = Field(default_factory=list)
    discomfort_appetite: str = "some_novelty"
    food_personality: str = "local_street_food"
    social_vibe: str = "romantic_couple"
    budget_mindset: str = "balanced"
    past_trip_loved: Optional[str] = None
    start_date: str = Field(..., alias="startDate", pattern=ISO_DATE_PATTERN)
    end_date: str = Field(..., alias="endDate", pattern=ISO_DATE_PATTERN)
    location: str
    destination_location: Optional[str] = None
    companions: str
    comfort_overridden: bool = False
    proceed_anyway: bool = False

    def to_trip_request(self) -> TripRequest:
        return TripRequest(**self.model_dump(exclude={"proceed_anyway"}))


def _error(status_code: int, message: str, field: Optional[str] = None, **extra: Any) -> JSONResponse:
    body: Dict[str, Any] = {"message": message}
    if field:
        body["field"] = field
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    return _error(400, first.get("msg", "Invalid request"), ".".join(loc) or None)


@app.exception_handler(TripValidationError)
async def handle_trip_validation(_request: Request, exc: TripValidationError) -> JSONResponse:
    return _error(400, str(exc), exc.field)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/location-suggestions")
def location_suggestions(query: str = "") -> Dict[str, Any]:
    suggestions = suggest_locations(query)
    return {
        "suggestions": [
            {"city": s.city, "country": s.country, "displayName": s.display_name, "currency": s.currency}
            for s in suggestions
        ]
    }


@app.post("/api/estimate-budget")
def estimate_budget(payload: TripRequestPayload) -> Dict[str, Any]:
    req = payload.to_trip_request()
    ensure_valid_trip_request(req)
    return assessment_to_dict(assess_budget(trip_parameters_from_request(req)))


def _run(payload: TripRequestPayload, mode: str):
    req = payload.to_trip_request()
    try:
        state = run_planner(
            req,
            mode=mode,
            proceed_anyway=payload.proceed_anyway,
            thread_id=f"planner-{uuid4()}",
        )
    except (LLMConfigurationError, LLMResponseError) as exc:
        logger.error("Planning failed: %s", exc)
        return _error(500, str(exc))
    except APIError as exc:
        logger.error("OpenAI request failed: %s", exc)
        return _error(500, describe_openai_error(exc))

    summary = summarize_response(state)
    if summary["blocked"]:
        budget = summary["budget"] or {}
        return _error(422, budget.get("warning") or "Budget looks insufficient", "budget_amount", budget=budget)
    return summary


@app.post("/api/recommend-destinations")
def recommend(payload: TripRequestPayload):
    result = _run(payload, "recommendations")
    if isinstance(result, JSONResponse):
        return result
    return {**result["recommendations"], "budget": result["budget"]}


@app.post("/api/generate-itinerary")
def generate(payload: TripRequestPayload):
    result = _run(payload, "itinerary")
    if isinstance(result, JSONResponse):
        return result
    return {**result["itinerary"], "budget": result["budget"]}
