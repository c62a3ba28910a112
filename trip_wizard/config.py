"""Application configuration helpers."""

from dataclasses import dataclass
import os
import re
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

_INVISIBLE_SPACES = re.compile("[\u00a0\u1680\u2000-\u200f\u2028\u2029\u202f\u205f\u3000]")


@dataclass
class Settings:
    """Holds runtime configuration loaded from the environment."""

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    max_output_tokens: int = 3000
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    geocoding_timeout: float = 10.0
    log_level: str = "INFO"


def clean_env(value: Optional[str]) -> Optional[str]:
    """Strip whitespace, invisible spaces and wrapping quotes from an env value."""

    if not value:
        return None
    cleaned = _INVISIBLE_SPACES.sub("", value.strip())
    cleaned = re.sub(r"^['\"]|['\"]$", "", cleaned)
    return cleaned or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings so every module shares the same values."""

    settings = Settings(
        openai_api_key=clean_env(
            os.getenv("AI_INTEGRATIONS_OPENAI_API_KEY") or os.getenv("OPENAI_API_KEY")
        ),
        openai_base_url=clean_env(
            os.getenv("AI_INTEGRATIONS_OPENAI_BASE_URL") or os.getenv("OPENAI_BASE_URL")
        ),
        log_level=(clean_env(os.getenv("LOG_LEVEL")) or "INFO").upper(),
    )
    model = clean_env(os.getenv("OPENAI_MODEL"))
    if model:
        settings.openai_model = model
    geocoding_url = clean_env(os.getenv("GEOCODING_URL"))
    if geocoding_url:
        settings.geocoding_url = geocoding_url
    timeout = clean_env(os.getenv("GEOCODING_TIMEOUT"))
    if timeout:
        try:
            settings.geocoding_timeout = float(timeout)
        except ValueError:
            raise ValueError(f"GEOCODING_TIMEOUT must be a number, got {timeout!r}.") from None
    return settings
