"""Tests for the budget-feasibility heuristics."""

from __future__ import annotations

import itertools

import pytest

from trip_wizard.budget import (
    assess_budget,
    budget_guidance,
    convert_from_reference,
    convert_to_reference,
    currency_strength,
    derive_budget_tier,
    estimate_budget_range,
    reference_rate,
    travelers_for,
)
from trip_wizard.models import BudgetRange, CountryProfile, CurrencyProfile, TripParameters
from trip_wizard.reference_data import ReferenceTables


def _params(**overrides):
    data = dict(
        trip_type="domestic",
        number_of_people=2,
        includes_flights=False,
        budget_amount=10_000,
        currency="INR",
        comfort_level="medium",
        start_location="Mumbai, India",
        start_date="2025-06-10",
        end_date="2025-06-13",
        days=3,
    )
    data.update(overrides)
    return TripParameters(**data)


def test_domestic_low_comfort_range_matches_formula():
    budget_range = estimate_budget_range(
        days=3,
        travelers=2,
        trip_type="domestic",
        currency="INR",
        start_location="Mumbai, India",
        comfort_level="low",
        includes_flights=False,
    )
    assert budget_range.low == round(2 * (3 * 1200 + 3000) * 0.85 * 1 * 0.85 * 0.78) == 7439
    assert budget_range.high == round(2 * (3 * 3500 + 8000) * 0.85 * 1 * 0.85 * 0.78) == 20851


def test_domestic_medium_comfort_range():
    budget_range = estimate_budget_range(3, 2, "domestic", "INR", "Mumbai, India", "medium", False)
    assert budget_range == BudgetRange(low=8752, high=24531)


def test_international_range_applies_region_currency_and_duration():
    # europe 1.15, strong currency 0.9, short haul 0.9
    budget_range = estimate_budget_range(
        days=4,
        travelers=1,
        trip_type="international",
        currency="GBP",
        start_location="London, UK",
        comfort_level="medium",
        includes_flights=True,
        max_flight_hours=5,
    )
    assert budget_range == BudgetRange(low=44712, high=109917)


def test_domestic_trip_ignores_currency_strength_and_flight_hours():
    inr = estimate_budget_range(3, 2, "domestic", "INR", "Mumbai, India", "medium", True, 14)
    usd = estimate_budget_range(3, 2, "domestic", "USD", "Mumbai, India", "medium", True, None)
    assert inr == usd


def test_unknown_origin_uses_neutral_defaults():
    domestic = estimate_budget_range(1, 1, "domestic", "INR", "Atlantis", "medium", True)
    assert domestic == BudgetRange(low=1200 + 3000, high=3500 + 8000)
    international = estimate_budget_range(1, 1, "international", "XYZ", "", "medium", True)
    assert international == BudgetRange(low=round((4500 + 30000) * 1.1), high=round((12000 + 70000) * 1.1))


def test_range_low_never_exceeds_high():
    combos = itertools.product(
        [1, 2, 7, 30],
        [1, 3, 6],
        ["domestic", "international"],
        ["INR", "USD", "AUD", "XYZ"],
        ["Chennai, India", "Sydney, Australia", "Atlantis", ""],
        ["low", "medium", "premium", "unknown"],
        [True, False],
        [None, 3, 8, 16],
    )
    for days, travelers, trip_type, currency, origin, comfort, flights, hours in combos:
        budget_range = estimate_budget_range(days, travelers, trip_type, currency, origin, comfort, flights, hours)
        assert budget_range.low <= budget_range.high


def test_non_positive_days_and_travelers_are_clamped():
    assert estimate_budget_range(0, 0, "domestic", "INR", "", "medium", True) == estimate_budget_range(
        1, 1, "domestic", "INR", "", "medium", True
    )


def test_substitute_tables_drive_domestic_multiplier():
    tables = ReferenceTables(
        country_aliases={"FD": "Freedonia"},
        countries={"Freedonia": CountryProfile(region="europe", currency="FDD", domestic_multiplier=2.0)},
        currencies={},
        nearby_value_destinations={},
        companion_travelers={},
    )
    budget_range = estimate_budget_range(1, 1, "domestic", "FDD", "Capital City, FD", "medium", True, tables=tables)
    assert budget_range == BudgetRange(low=8400, high=23000)


def test_unrecognised_currency_strength_is_neutral():
    def tables_with(strength):
        return ReferenceTables(
            country_aliases={"FD": "Freedonia"},
            countries={"Freedonia": CountryProfile(region="europe", currency="FDD")},
            currencies={"FDD": CurrencyProfile(rate=10.0, strength=strength)},
            nearby_value_destinations={},
            companion_travelers={},
        )

    volatile = estimate_budget_range(
        2, 1, "international", "FDD", "Capital City, FD", "medium", True, 8, tables=tables_with("volatile")
    )
    medium = estimate_budget_range(
        2, 1, "international", "FDD", "Capital City, FD", "medium", True, 8, tables=tables_with("medium")
    )
    assert volatile == medium


def test_currency_conversion_round_trip():
    assert convert_from_reference(8300, "USD") == 100.0
    assert convert_from_reference(1234.5, "USD") == pytest.approx(1234.5 / 83)
    assert convert_to_reference(convert_from_reference(1234.5, "USD"), "USD") == pytest.approx(1234.5)


def test_unknown_currency_falls_back_to_reference():
    assert reference_rate("XYZ") == 1.0
    assert currency_strength("XYZ") == "medium"
    assert convert_from_reference(500, "XYZ") == 500
    assert convert_from_reference(500, None) == 500


def test_currency_lookup_ignores_case_and_whitespace():
    assert currency_strength(" usd ") == "strong"
    assert currency_strength("INR") == "weak"


def test_derive_budget_tier_boundaries():
    budget_range = BudgetRange(low=1000, high=3000)
    assert derive_budget_tier(budget_range.low - 1, budget_range) == "low"
    assert derive_budget_tier(budget_range.high + 1, budget_range) == "premium"
    assert derive_budget_tier(2000, budget_range) == "medium"
    assert derive_budget_tier(budget_range.low, budget_range) == "medium"
    assert derive_budget_tier(budget_range.high, budget_range) == "medium"


def test_travelers_for_uses_companion_defaults():
    assert travelers_for(3, "Solo") == 3
    assert travelers_for(None, "Family with Kids") == 4
    assert travelers_for(0, "Couple") == 2
    assert travelers_for(None, "Robots") == 1


def test_budget_guidance_by_trip_type_and_strength():
    assert "off-peak" in budget_guidance("domestic", "weak", "India")
    assert "Sri Lanka" in budget_guidance("international", "weak", "India")
    assert "nearby value destinations" in budget_guidance("international", "weak", "Atlantis")
    assert "premium" in budget_guidance("international", "strong", "United States")
    assert "Balance" in budget_guidance("international", "medium", "Australia")


def test_assess_budget_within_range():
    assessment = assess_budget(_params(budget_amount=10_000))
    assert assessment.reference_range == BudgetRange(low=8752, high=24531)
    assert assessment.status == "within"
    assert assessment.budget_tier == "medium"
    assert assessment.recommended_comfort_level == "medium"
    assert assessment.origin_country == "India"
    assert assessment.origin_region == "asia"
    assert assessment.can_proceed
    assert assessment.warning is None


def test_assess_budget_small_shortfall_can_proceed_without_flights():
    # 0.75 * 8752 = 6564
    assessment = assess_budget(_params(budget_amount=7_000))
    assert assessment.status == "below"
    assert assessment.warning
    assert assessment.can_proceed
    assert assessment.recommended_comfort_level == "low"


def test_assess_budget_large_shortfall_blocks():
    assessment = assess_budget(_params(budget_amount=5_000))
    assert assessment.status == "below"
    assert not assessment.can_proceed


def test_assess_budget_shortfall_with_flights_blocks():
    # flights included: range low is 11220, 0.75 * 11220 = 8415
    assessment = assess_budget(_params(budget_amount=10_000, includes_flights=True))
    assert assessment.reference_range.low == 11220
    assert assessment.status == "below"
    assert not assessment.can_proceed


def test_assess_budget_above_range_respects_override():
    derived = assess_budget(_params(budget_amount=50_000))
    assert derived.status == "above"
    assert derived.recommended_comfort_level == "premium"

    overridden = assess_budget(_params(budget_amount=50_000, comfort_overridden=True))
    assert overridden.budget_tier == "premium"
    assert overridden.recommended_comfort_level == "medium"


def test_assess_budget_converts_to_user_currency():
    assessment = assess_budget(_params(currency="USD", budget_amount=200))
    assert assessment.budget_in_reference == 200 * 83
    assert assessment.local_range == BudgetRange(low=105, high=296)
    assert assessment.status == "within"
    assert assessment.currency_strength == "strong"
