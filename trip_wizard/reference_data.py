"""Static lookup tables for location and budget heuristics.

Rates and multipliers are illustrative constants, not live FX or cost data.
All amounts are expressed against the reference currency (INR).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Tuple

from .models import CountryProfile, CurrencyProfile


REFERENCE_CURRENCY = "INR"

REGIONS = (
    "asia",
    "europe",
    "north_america",
    "latin_america",
    "middle_east",
    "africa",
    "oceania",
    "global",
)


@dataclass(frozen=True)
class ReferenceTables:
    """Read-only tables shared by the normalizer and the estimator."""

    country_aliases: Mapping[str, str]
    countries: Mapping[str, CountryProfile]
    currencies: Mapping[str, CurrencyProfile]
    nearby_value_destinations: Mapping[str, Tuple[str, ...]]
    companion_travelers: Mapping[str, int]
    country_codes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


_COUNTRY_ALIASES = {
    "The Netherlands": "Netherlands",
    "Holland": "Netherlands",
    "United States of America": "United States",
    "USA": "United States",
    "U.S.A.": "United States",
    "US": "United States",
    "UK": "United Kingdom",
    "U.K.": "United Kingdom",
    "Great Britain": "United Kingdom",
    "England": "United Kingdom",
    "UAE": "United Arab Emirates",
    "Czechia": "Czech Republic",
    "Republic of Korea": "South Korea",
}

# country -> (region, currency, domestic multiplier)
_COUNTRIES = {
    "India": ("asia", "INR", 0.85),
    "Japan": ("asia", "JPY", 1.2),
    "Singapore": ("asia", "SGD", 1.3),
    "Thailand": ("asia", "THB", 0.8),
    "Vietnam": ("asia", "VND", 0.75),
    "Indonesia": ("asia", "IDR", 0.8),
    "Malaysia": ("asia", "MYR", 0.85),
    "Sri Lanka": ("asia", "LKR", 0.8),
    "Nepal": ("asia", "NPR", 0.75),
    "South Korea": ("asia", "KRW", 1.1),
    "Taiwan": ("asia", "TWD", 1.05),
    "China": ("asia", "CNY", 1.0),
    "Netherlands": ("europe", "EUR", 1.25),
    "Belgium": ("europe", "EUR", 1.2),
    "Germany": ("europe", "EUR", 1.2),
    "France": ("europe", "EUR", 1.25),
    "Italy": ("europe", "EUR", 1.15),
    "Spain": ("europe", "EUR", 1.1),
    "Portugal": ("europe", "EUR", 1.0),
    "Czech Republic": ("europe", "CZK", 0.95),
    "Switzerland": ("europe", "CHF", 1.5),
    "United Kingdom": ("europe", "GBP", 1.3),
    "Turkey": ("europe", "TRY", 0.9),
    "United States": ("north_america", "USD", 1.35),
    "Canada": ("north_america", "CAD", 1.25),
    "Mexico": ("latin_america", "MXN", 0.9),
    "Costa Rica": ("latin_america", "CRC", 1.0),
    "Dominican Republic": ("latin_america", "DOP", 0.95),
    "Colombia": ("latin_america", "COP", 0.85),
    "Brazil": ("latin_america", "BRL", 0.95),
    "Argentina": ("latin_america", "ARS", 0.9),
    "United Arab Emirates": ("middle_east", "AED", 1.2),
    "Saudi Arabia": ("middle_east", "SAR", 1.15),
    "Qatar": ("middle_east", "QAR", 1.2),
    "Israel": ("middle_east", "ILS", 1.25),
    "Egypt": ("africa", "EGP", 0.8),
    "Morocco": ("africa", "MAD", 0.85),
    "Kenya": ("africa", "KES", 0.9),
    "South Africa": ("africa", "ZAR", 0.95),
    "Australia": ("oceania", "AUD", 1.25),
    "New Zealand": ("oceania", "NZD", 1.2),
    "Fiji": ("oceania", "FJD", 1.05),
}

# code -> (reference units per one unit of this currency, strength)
_CURRENCIES = {
    "INR": (1.0, "weak"),
    "USD": (83.0, "strong"),
    "EUR": (90.0, "strong"),
    "GBP": (105.0, "strong"),
    "CHF": (94.0, "strong"),
    "AUD": (55.0, "medium"),
    "CAD": (61.0, "medium"),
    "SGD": (62.0, "medium"),
    "NZD": (50.0, "medium"),
    "AED": (22.6, "medium"),
    "JPY": (0.56, "weak"),
    "THB": (2.3, "weak"),
}

_NEARBY_VALUE_DESTINATIONS = {
    "Netherlands": ("Belgium", "Germany", "Portugal", "Czech Republic"),
    "India": ("Sri Lanka", "Thailand", "Vietnam", "Nepal"),
    "Australia": ("Bali (Indonesia)", "Auckland (New Zealand)", "Fiji", "Vietnam"),
    "New Zealand": ("Australia (East Coast)", "Fiji", "Bali (Indonesia)", "Vietnam"),
    "United States": ("Mexico", "Costa Rica", "Dominican Republic", "Colombia"),
    "Canada": ("Mexico", "Costa Rica", "Portugal", "Dominican Republic"),
    "United Kingdom": ("Portugal", "Spain", "Turkey", "Morocco"),
    "Singapore": ("Malaysia", "Thailand", "Vietnam", "Indonesia"),
    "Japan": ("South Korea", "Taiwan", "Thailand", "Vietnam"),
}

_COMPANION_TRAVELERS = {
    "Solo": 1,
    "Couple": 2,
    "Family with Kids": 4,
    "Friends Group": 4,
    "Senior Citizens": 2,
}

# ISO 3166-1 alpha-2 -> canonical country name, for geocoder results whose
# free-text country comes back localized.
_COUNTRY_CODES = {
    "IN": "India",
    "JP": "Japan",
    "SG": "Singapore",
    "TH": "Thailand",
    "VN": "Vietnam",
    "ID": "Indonesia",
    "MY": "Malaysia",
    "LK": "Sri Lanka",
    "NP": "Nepal",
    "KR": "South Korea",
    "TW": "Taiwan",
    "CN": "China",
    "NL": "Netherlands",
    "BE": "Belgium",
    "DE": "Germany",
    "FR": "France",
    "IT": "Italy",
    "ES": "Spain",
    "PT": "Portugal",
    "CZ": "Czech Republic",
    "CH": "Switzerland",
    "GB": "United Kingdom",
    "TR": "Turkey",
    "US": "United States",
    "CA": "Canada",
    "MX": "Mexico",
    "CR": "Costa Rica",
    "DO": "Dominican Republic",
    "CO": "Colombia",
    "BR": "Brazil",
    "AR": "Argentina",
    "AE": "United Arab Emirates",
    "SA": "Saudi Arabia",
    "QA": "Qatar",
    "IL": "Israel",
    "EG": "Egypt",
    "MA": "Morocco",
    "KE": "Kenya",
    "ZA": "South Africa",
    "AU": "Australia",
    "NZ": "New Zealand",
    "FJ": "Fiji",
}


def build_reference_tables() -> ReferenceTables:
    """Assemble a fresh set of immutable tables from the module constants."""

    countries = {
        name: CountryProfile(region=region, currency=currency, domestic_multiplier=multiplier)
        for name, (region, currency, multiplier) in _COUNTRIES.items()
    }
    currencies = {
        code: CurrencyProfile(rate=rate, strength=strength)
        for code, (rate, strength) in _CURRENCIES.items()
    }
    return ReferenceTables(
        country_aliases=MappingProxyType(dict(_COUNTRY_ALIASES)),
        countries=MappingProxyType(countries),
        currencies=MappingProxyType(currencies),
        nearby_value_destinations=MappingProxyType(dict(_NEARBY_VALUE_DESTINATIONS)),
        companion_travelers=MappingProxyType(dict(_COMPANION_TRAVELERS)),
        country_codes=MappingProxyType(dict(_COUNTRY_CODES)),
    )


@lru_cache(maxsize=1)
def get_reference_tables() -> ReferenceTables:
    """Build the tables once so every caller shares the same read-only view."""

    return build_reference_tables()
