"""Thin Open-Meteo geocoding client for location suggestions."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import get_settings
from ..locations import country_from_code, currency_for_country, normalize_country_name
from ..models import LocationSuggestion


logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 8


def _fetch_results(query: str, client: Optional[httpx.Client]) -> List[Dict[str, Any]]:
    settings = get_settings()
    params = {"name": query, "count": MAX_RESULTS, "language": "en", "format": "json"}
    try:
        if client is None:
            with httpx.Client(timeout=settings.geocoding_timeout) as owned:
                response = owned.get(settings.geocoding_url, params=params)
        else:
            response = client.get(settings.geocoding_url, params=params)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Location suggestion fetch failed: %s", exc)
        return []
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        return []
    return [r for r in results if isinstance(r, dict)]


def suggest_locations(query: str, *, client: Optional[httpx.Client] = None) -> List[LocationSuggestion]:
    """Return canonical "City, Country" candidates for a partial place name."""

    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    suggestions: List[LocationSuggestion] = []
    seen = set()
    for result in _fetch_results(query, client):
        city = result.get("name")
        country = country_from_code(result.get("country_code")) or normalize_country_name(result.get("country"))
        if not city or not country:
            continue
        display_name = f"{city}, {country}"
        if display_name in seen:
            continue
        seen.add(display_name)
        suggestions.append(
            LocationSuggestion(
                city=city,
                country=country,
                display_name=display_name,
                currency=currency_for_country(country),
            )
        )
    return suggestions
