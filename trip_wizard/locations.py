"""Resolve free-text locations to canonical countries and coarse regions."""

from __future__ import annotations

import logging
from typing import Optional

from .reference_data import ReferenceTables, get_reference_tables


logger = logging.getLogger(__name__)

GLOBAL_REGION = "global"


def normalize_country_name(raw: Optional[str], tables: Optional[ReferenceTables] = None) -> Optional[str]:
    if not raw:
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None
    tables = tables or get_reference_tables()
    return tables.country_aliases.get(trimmed, trimmed)


def country_from_code(code: Optional[str], tables: Optional[ReferenceTables] = None) -> Optional[str]:
    """Map an ISO alpha-2 code such as "NL" to its canonical country name."""

    if not isinstance(code, str) or not code.strip():
        return None
    tables = tables or get_reference_tables()
    return tables.country_codes.get(code.strip().upper())


def country_from_location(location: Optional[str], tables: Optional[ReferenceTables] = None) -> Optional[str]:
    """Return the country named by the last comma-separated segment.

    "Chennai, India" and "India" both resolve to "India"; empty or comma-only
    input resolves to None.
    """

    if not location:
        return None
    parts = [part.strip() for part in location.split(",")]
    parts = [part for part in parts if part]
    if not parts:
        return None
    return normalize_country_name(parts[-1], tables)


def region_from_country(country: Optional[str], tables: Optional[ReferenceTables] = None) -> str:
    if not country:
        return GLOBAL_REGION
    tables = tables or get_reference_tables()
    profile = tables.countries.get(country)
    if profile is None:
        logger.debug("No region known for %r; using %s", country, GLOBAL_REGION)
        return GLOBAL_REGION
    return profile.region


def currency_for_country(country: Optional[str], tables: Optional[ReferenceTables] = None) -> Optional[str]:
    if not country:
        return None
    tables = tables or get_reference_tables()
    profile = tables.countries.get(country)
    return profile.currency if profile else None
