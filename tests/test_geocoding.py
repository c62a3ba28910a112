"""Tests for the location-suggestion client."""

from __future__ import annotations

import httpx

from trip_wizard.services.geocoding import suggest_locations


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_suggestions_are_canonical_and_deduplicated():
    seen_params = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen_params.update(request.url.params)
        return httpx.Response(
            200,
            json={
                "results": [
                    {"name": "Amsterdam", "country": "The Netherlands"},
                    {"name": "Amsterdam", "country": "Netherlands"},
                    {"name": "Amsterdam", "country": "United States of America"},
                    {"name": "Nowhere"},
                ]
            },
        )

    suggestions = suggest_locations("Amster", client=_client(handler))

    assert [s.display_name for s in suggestions] == ["Amsterdam, Netherlands", "Amsterdam, United States"]
    assert suggestions[0].currency == "EUR"
    assert seen_params["name"] == "Amster"
    assert seen_params["count"] == "8"


def test_short_query_skips_the_network():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert suggest_locations(" a ", client=_client(handler)) == []


def test_upstream_failure_yields_no_suggestions():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": True})

    assert suggest_locations("Paris", client=_client(handler)) == []


def test_malformed_body_yields_no_suggestions():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    assert suggest_locations("Paris", client=_client(handler)) == []


def test_country_code_wins_over_localized_country_name():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "results": [
                    {"name": "Amsterdam", "country": "Nederland", "country_code": "NL"},
                    {"name": "Lima", "country": "Perú", "country_code": "PE"},
                ]
            },
        )

    suggestions = suggest_locations("Ams", client=_client(handler))

    assert [s.display_name for s in suggestions] == ["Amsterdam, Netherlands", "Lima, Perú"]
    assert suggestions[0].currency == "EUR"
    assert suggestions[1].currency is None
