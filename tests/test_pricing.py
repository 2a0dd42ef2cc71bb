"""Derived pricing: daily and monthly rates always follow the hourly rate."""

import pytest

from app.models.onboarding_models import ServicePricingInput
from app.services.pricing_services import (
    build_service_pricing,
    calculate_daily_rate,
    calculate_monthly_rate,
    derive_service_pricing,
    migrate_legacy_pricing,
    parse_rate,
    update_service_pricing,
)


@pytest.mark.parametrize("hourly", [1, 12.5, 33.333, 150000, 0.01])
def test_daily_and_monthly_are_rounded_multiples(hourly):
    assert calculate_daily_rate(hourly) == round(hourly * 8, 2)
    assert calculate_monthly_rate(hourly) == round(hourly * 160, 2)


def test_blank_or_invalid_rate_derives_zero():
    assert parse_rate("") is None
    assert parse_rate("abc") is None
    assert calculate_daily_rate("") == 0.0
    assert calculate_monthly_rate(None) == 0.0


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", " Infinity ", float("nan"), float("inf")])
def test_non_finite_rates_are_not_numbers(value):
    assert parse_rate(value) is None
    assert calculate_daily_rate(value) == 0.0


def test_string_rates_from_forms_are_parsed():
    pricing = build_service_pricing(" 20 ")
    assert pricing.hourly_rate == 20.0
    assert pricing.daily_rate == 160.0
    assert pricing.monthly_rate == 3200.0


def test_editing_one_category_leaves_the_others_alone():
    pricing = {"tour_guide": build_service_pricing(10), "translator": build_service_pricing(25)}

    updated = update_service_pricing(pricing, "tour_guide", "hourly_rate", "12")

    assert updated["tour_guide"].daily_rate == 96.0
    assert updated["translator"] == pricing["translator"]
    # the input map is not mutated
    assert pricing["tour_guide"].hourly_rate == 10.0


def test_derived_fields_can_not_be_set_directly():
    with pytest.raises(ValueError):
        update_service_pricing({}, "tour_guide", "daily_rate", 100)


def test_derive_skips_categories_without_rate():
    derived = derive_service_pricing(
        {"tour_guide": ServicePricingInput(hourly_rate="15", min_booking_hours=3), "translator": ServicePricingInput(hourly_rate="")}
    )

    assert list(derived) == ["tour_guide"]
    assert derived["tour_guide"].monthly_rate == 2400.0
    assert derived["tour_guide"].min_booking_hours == 3


def test_legacy_single_rate_is_migrated_to_a_pricing_map():
    migrated = migrate_legacy_pricing({"service_category": "virtual_assist", "hourly_rate": 9, "min_booking_hours": 4})

    assert migrated["virtual_assist"].daily_rate == 72.0
    assert migrated["virtual_assist"].min_booking_hours == 4


def test_stored_pricing_is_recomputed_from_hourly_rate():
    # stale daily/monthly values in the row are ignored
    migrated = migrate_legacy_pricing({"service_pricing": {"tour_guide": {"hourly_rate": 10, "daily_rate": 1, "monthly_rate": 1}}})

    assert migrated["tour_guide"].daily_rate == 80.0
    assert migrated["tour_guide"].monthly_rate == 1600.0
