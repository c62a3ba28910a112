"""LangGraph-powered planning workflow.

The graph normalizes the traveller's locations, runs the budget heuristics and
only then hands the request to the LLM. A budget that is too far below the
recommended range stops the run before any completion call is made, unless
the caller explicitly chooses to proceed anyway.
"""

from __future__ import annotations

import operator
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Optional, TypedDict
from uuid import uuid4

from langchain_core.messages import AIMessage
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, StateGraph

from .budget import assess_budget
from .locations import country_from_location, region_from_country
from .models import (
    BudgetAssessment,
    DestinationRecommendations,
    TripItinerary,
    TripRequest,
    assessment_to_dict,
    itinerary_to_dict,
    recommendations_to_dict,
)
from .planner import generate_itinerary, recommend_destinations
from .validation import ensure_valid_trip_request, trip_parameters_from_request


MODES = ("itinerary", "recommendations")


# ---------------------------------------------------------------------------
# LangGraph state schema
# ---------------------------------------------------------------------------


class PlannerState(TypedDict):
    messages: Annotated[List, operator.add]
    request: TripRequest
    mode: str
    proceed_anyway: bool
    origin_country: Optional[str]
    origin_region: str
    destination_country: Optional[str]
    destination_region: str
    assessment: Optional[BudgetAssessment]
    itinerary: Optional[TripItinerary]
    recommendations: Optional[DestinationRecommendations]
    current_step: str
    is_complete: bool
    blocked: bool


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def normalize_locations(state: PlannerState) -> Dict[str, Any]:
    request = state["request"]
    origin = country_from_location(request.location)
    destination = country_from_location(request.destination_location)
    msg = f"Origin resolved to {origin or 'an unknown country'}."
    return {
        "origin_country": origin,
        "origin_region": region_from_country(origin),
        "destination_country": destination,
        "destination_region": region_from_country(destination),
        "current_step": "assess_budget",
        "messages": [AIMessage(content=msg)],
    }


def budget_assessor(state: PlannerState) -> Dict[str, Any]:
    assessment = assess_budget(trip_parameters_from_request(state["request"]))
    msg = (
        f"Recommended budget {assessment.local_range.low:,}-{assessment.local_range.high:,} "
        f"{assessment.parameters.currency}; your budget is {assessment.status} this range."
    )
    return {
        "assessment": assessment,
        "current_step": "gate",
        "messages": [AIMessage(content=msg)],
    }


def itinerary_generator(state: PlannerState) -> Dict[str, Any]:
    itinerary = generate_itinerary(state["request"], state["assessment"])
    return {
        "itinerary": itinerary,
        "is_complete": True,
        "current_step": "complete",
        "messages": [AIMessage(content=f"Itinerary ready for {itinerary.destination}.")],
    }


def destination_recommender(state: PlannerState) -> Dict[str, Any]:
    recommendations = recommend_destinations(state["request"], state["assessment"])
    names = ", ".join(option.destination for option in recommendations.options)
    return {
        "recommendations": recommendations,
        "is_complete": True,
        "current_step": "complete",
        "messages": [AIMessage(content=f"Recommended destinations: {names}.")],
    }


def budget_blocked(state: PlannerState) -> Dict[str, Any]:
    assessment = state["assessment"]
    return {
        "blocked": True,
        "current_step": "blocked",
        "messages": [AIMessage(content=assessment.warning or "Budget looks insufficient.")],
    }


def route_after_budget(state: PlannerState) -> str:
    assessment = state["assessment"]
    if assessment is not None and not assessment.can_proceed and not state["proceed_anyway"]:
        return "blocked"
    return state["mode"]


# ---------------------------------------------------------------------------
# Graph compilation / execution helpers
# ---------------------------------------------------------------------------


def _build_graph():
    workflow = StateGraph(PlannerState)
    workflow.add_node("normalize_locations", normalize_locations)
    workflow.add_node("assess_budget", budget_assessor)
    workflow.add_node("generate_itinerary", itinerary_generator)
    workflow.add_node("recommend_destinations", destination_recommender)
    workflow.add_node("budget_blocked", budget_blocked)

    workflow.set_entry_point("normalize_locations")
    workflow.add_edge("normalize_locations", "assess_budget")
    workflow.add_conditional_edges(
        "assess_budget",
        route_after_budget,
        {
            "itinerary": "generate_itinerary",
            "recommendations": "recommend_destinations",
            "blocked": "budget_blocked",
        },
    )
    workflow.add_edge("generate_itinerary", END)
    workflow.add_edge("recommend_destinations", END)
    workflow.add_edge("budget_blocked", END)
    memory = MemorySaver()
    return workflow.compile(checkpointer=memory)


@lru_cache(maxsize=1)
def get_planner_app():
    return _build_graph()


def default_mode(request: TripRequest) -> str:
    return "itinerary" if request.trip_goal == "know_destination" else "recommendations"


def build_initial_state(
    request: TripRequest, mode: Optional[str] = None, proceed_anyway: bool = False
) -> PlannerState:
    ensure_valid_trip_request(request)
    mode = mode or default_mode(request)
    if mode not in MODES:
        raise ValueError(f"Unknown planning mode '{mode}'. Expected one of {', '.join(MODES)}.")
    return {
        "messages": [],
        "request": request,
        "mode": mode,
        "proceed_anyway": proceed_anyway,
        "origin_country": None,
        "origin_region": "global",
        "destination_country": None,
        "destination_region": "global",
        "assessment": None,
        "itinerary": None,
        "recommendations": None,
        "current_step": "start",
        "is_complete": False,
        "blocked": False,
    }


def run_planner(
    request: TripRequest,
    *,
    mode: Optional[str] = None,
    proceed_anyway: bool = False,
    thread_id: Optional[str] = None,
) -> PlannerState:
    initial_state = build_initial_state(request, mode, proceed_anyway)
    app = get_planner_app()
    config = {"configurable": {"thread_id": thread_id or f"planner-{uuid4()}"}}
    final_state: PlannerState = app.invoke(initial_state, config=config)
    return final_state


def summarize_response(state: PlannerState) -> Dict[str, object]:
    assessment = state.get("assessment")
    itinerary = state.get("itinerary")
    recommendations = state.get("recommendations")
    return {
        "mode": state["mode"],
        "blocked": state.get("blocked", False),
        "origin_country": state.get("origin_country"),
        "origin_region": state.get("origin_region"),
        "destination_country": state.get("destination_country"),
        "destination_region": state.get("destination_region"),
        "budget": assessment_to_dict(assessment) if assessment else None,
        "itinerary": itinerary_to_dict(itinerary) if itinerary else None,
        "recommendations": recommendations_to_dict(recommendations) if recommendations else None,
        "progress": [message.content for message in state.get("messages", [])],
    }
