"""Utility helpers."""

from datetime import date, datetime
import re
from typing import List, Optional

FRIENDLY_DATE_FMT = "%A %b %d %Y"


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        if "T" in value:
            return datetime.fromisoformat(value).date()
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def trip_days(start_date_str: str, end_date_str: str) -> int:
    """Number of days between the two dates, never less than one."""

    start = parse_iso_date(start_date_str)
    end = parse_iso_date(end_date_str)
    if start is None or end is None:
        return 1
    return max((end - start).days, 1)


def truncate_summary(summary: str, max_words: int = 40, max_sentences: int = 2) -> str:
    text = summary.replace("\n", " ").strip()
    sentence_parts = re.split(r'(?<=[.!?])\s+', text)
    sentence_parts = [s for s in sentence_parts if s]
    if len(sentence_parts) > max_sentences:
        sentence_parts = sentence_parts[:max_sentences]
    truncated = " ".join(sentence_parts)
    words = truncated.split()
    if len(words) > max_words:
        truncated = " ".join(words[:max_words]) + "…"
    return truncated


def format_friendly_date(value: str) -> str:
    """Return a user-friendly date like 'Monday Nov 24 2025'."""

    parsed = parse_iso_date(value)
    if not parsed:
        return value
    return parsed.strftime(FRIENDLY_DATE_FMT)
