"""OpenAI client helpers."""

import json
import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from .config import get_settings


logger = logging.getLogger(__name__)

_client: Optional[OpenAI] = None


class LLMConfigurationError(RuntimeError):
    """Raised when the LLM provider is not configured."""


class LLMResponseError(RuntimeError):
    """Raised when the model returns nothing usable."""


def get_client() -> OpenAI:
    """Provide a singleton OpenAI client."""

    global _client
    if _client is None:
        settings = get_settings()
        if not settings.openai_api_key:
            raise LLMConfigurationError(
                "OpenAI API key is missing. Set OPENAI_API_KEY (or AI_INTEGRATIONS_OPENAI_API_KEY) "
                "and restart the server."
            )
        _client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    return _client


def parse_json_object(content: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from model output, tolerating Markdown code fences."""

    if not content:
        return None
    cleaned = content.strip()
    if cleaned.startswith("```"):
        parts = cleaned.split("\n", 1)
        cleaned = parts[1] if len(parts) > 1 else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip().rsplit("```", 1)[0]
    cleaned = cleaned.strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        start, end = cleaned.find("{"), cleaned.rfind("}")
        if start == -1 or end <= start:
            return None
        try:
            data = json.loads(cleaned[start : end + 1])
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


def llm_json_call(prompt: str, model: Optional[str] = None, max_output_tokens: Optional[int] = None) -> Dict[str, Any]:
    """Call Chat Completions in JSON mode and return the decoded object."""

    settings = get_settings()
    client = get_client()
    response = client.chat.completions.create(
        model=model or settings.openai_model,
        messages=[{"role": "user", "content": prompt}],
        response_format={"type": "json_object"},
        max_tokens=max_output_tokens or settings.max_output_tokens,
    )
    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise LLMResponseError("Empty response from AI")
    data = parse_json_object(content)
    if data is None:
        logger.warning("Model returned malformed JSON (%d chars)", len(content))
        raise LLMResponseError("AI response was not valid JSON")
    return data


def describe_openai_error(exc: Exception) -> str:
    """Turn an OpenAI SDK error into a message the wizard can show."""

    status = getattr(exc, "status_code", None)
    code = getattr(exc, "code", None)
    error_type = getattr(exc, "type", None)
    message = getattr(exc, "message", None) or str(exc)

    if status == 401 or code == "invalid_api_key":
        return (
            "Invalid OpenAI API key. Update OPENAI_API_KEY (or AI_INTEGRATIONS_OPENAI_API_KEY) "
            "and restart the server."
        )
    if status == 404 or code == "model_not_found":
        return (
            "Configured OpenAI model is unavailable. Set OPENAI_MODEL to an accessible model "
            "(e.g. gpt-4o-mini)."
        )
    if status == 429 or code == "insufficient_quota" or error_type == "insufficient_quota":
        return "OpenAI quota exceeded for this API key. Add billing/credits in your OpenAI account and retry."
    if status == 400 and message:
        return f"OpenAI request failed: {message}"
    if message:
        return f"Generation failed: {message}"
    return "Failed to generate itinerary"
