"""Simple CLI entry to exercise the trip wizard."""

import argparse
import json
import logging
from pathlib import Path

from trip_wizard import TripRequest, assess_budget, run_planner, summarize_response
from trip_wizard.config import get_settings
from trip_wizard.models import assessment_to_dict
from trip_wizard.validation import ensure_valid_trip_request, trip_parameters_from_request


def load_request(path: Path) -> TripRequest:
    data = json.loads(path.read_text())
    if "startDate" in data:
        data["start_date"] = data.pop("startDate")
    if "endDate" in data:
        data["end_date"] = data.pop("endDate")
    return TripRequest(**data)


def main() -> None:
    parser = argparse.ArgumentParser(description="Assess a trip budget or plan a trip from a JSON request.")
    parser.add_argument("request_file", type=Path, help="Path to a JSON file describing the trip request")
    parser.add_argument(
        "--mode",
        choices=["assess", "itinerary", "recommendations"],
        default="assess",
        help="Only assess the budget, or continue to itinerary/recommendation generation",
    )
    parser.add_argument("--proceed-anyway", action="store_true", help="Continue even if the budget looks too low")
    parser.add_argument("--output", type=Path, help="Optional path to save the result JSON")
    args = parser.parse_args()

    logging.basicConfig(level=get_settings().log_level)
    trip_request = load_request(args.request_file)

    if args.mode == "assess":
        ensure_valid_trip_request(trip_request)
        payload = assessment_to_dict(assess_budget(trip_parameters_from_request(trip_request)))
    else:
        state = run_planner(trip_request, mode=args.mode, proceed_anyway=args.proceed_anyway)
        payload = summarize_response(state)
    result = json.dumps(payload, indent=2)

    if args.output:
        args.output.write_text(result)
        print(f"Result saved to {args.output}")
    else:
        print(result)


if __name__ == "__main__":
    main()
