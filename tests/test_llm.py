"""Tests for the OpenAI helpers that do not touch the network."""

from trip_wizard.llm import describe_openai_error, parse_json_object


class FakeAPIError(Exception):
    def __init__(self, message, status_code=None, code=None, type=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.type = type


def test_parse_json_object_accepts_fenced_output():
    content = '```json\n{"destination": "Goa"}\n```'
    assert parse_json_object(content) == {"destination": "Goa"}


def test_parse_json_object_recovers_embedded_object():
    assert parse_json_object('Here you go: {"a": 1} hope it helps') == {"a": 1}


def test_parse_json_object_rejects_non_objects():
    assert parse_json_object("[1, 2]") is None
    assert parse_json_object("not json") is None
    assert parse_json_object("") is None
    assert parse_json_object('{"truncated": ') is None


def test_describe_openai_error_maps_known_failures():
    assert "Invalid OpenAI API key" in describe_openai_error(FakeAPIError("bad key", status_code=401))
    assert "model is unavailable" in describe_openai_error(FakeAPIError("nope", code="model_not_found"))
    assert "quota exceeded" in describe_openai_error(FakeAPIError("quota", type="insufficient_quota"))
    assert describe_openai_error(FakeAPIError("bad input", status_code=400)) == "OpenAI request failed: bad input"
    assert describe_openai_error(FakeAPIError("boom", status_code=502)) == "Generation failed: boom"
