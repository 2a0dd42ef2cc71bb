"""
Derived pricing for worker services.

daily and monthly rates are never stored on their own: they are recomputed from the hourly rate every time it changes,
so the three numbers can not drift apart.
"""

from app.models.onboarding_models import ServicePricing, ServicePricingInput, DEFAULT_MIN_BOOKING_HOURS
from typing import Optional, Dict, Union, Any
import math

HOURS_PER_DAY = 8
HOURS_PER_MONTH = 160


def parse_rate(value: Optional[Union[float, int, str]]) -> Optional[float]:
    """Parse a form value into a float, None when blank, not a number, nan or infinite"""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        result = float(value)
    else:
        value = value.strip()
        if not value:
            return None
        try:
            result = float(value)
        except ValueError:
            return None

    return result if math.isfinite(result) else None


def calculate_daily_rate(hourly_rate: Optional[Union[float, str]]) -> float:
    hourly = parse_rate(hourly_rate)
    if hourly is None:
        return 0.0
    return round(hourly * HOURS_PER_DAY, 2)


def calculate_monthly_rate(hourly_rate: Optional[Union[float, str]]) -> float:
    hourly = parse_rate(hourly_rate)
    if hourly is None:
        return 0.0
    return round(hourly * HOURS_PER_MONTH, 2)


def build_service_pricing(hourly_rate: Union[float, str], min_booking_hours: int = DEFAULT_MIN_BOOKING_HOURS) -> ServicePricing:
    hourly = parse_rate(hourly_rate) or 0.0
    return ServicePricing(
        hourly_rate=hourly,
        daily_rate=calculate_daily_rate(hourly),
        monthly_rate=calculate_monthly_rate(hourly),
        min_booking_hours=min_booking_hours,
    )


def update_service_pricing(
    service_pricing: Dict[str, ServicePricing], category: str, field: str, value: Any
) -> Dict[str, ServicePricing]:
    """Return a new pricing map with one field of one category changed; other categories are untouched"""
    current = service_pricing.get(category) or ServicePricing(hourly_rate=0.0, daily_rate=0.0, monthly_rate=0.0)

    if field == "hourly_rate":
        updated = build_service_pricing(value, current.min_booking_hours)
    elif field == "min_booking_hours":
        updated = current.model_copy(update={"min_booking_hours": int(value)})
    else:
        raise ValueError(f"{field} is derived from hourly_rate and can not be set directly")

    return {**service_pricing, category: updated}


def derive_service_pricing(service_pricing: Dict[str, ServicePricingInput]) -> Dict[str, ServicePricing]:
    """Turn raw form input into full pricing entries, skipping categories without a usable rate"""
    derived = {}
    for category, pricing_input in service_pricing.items():
        if parse_rate(pricing_input.hourly_rate) is None:
            continue
        derived[category] = build_service_pricing(pricing_input.hourly_rate, pricing_input.min_booking_hours)
    return derived


def migrate_legacy_pricing(profile: Dict[str, Any]) -> Dict[str, ServicePricing]:
    """Read service_pricing from a profile row, falling back to the old single service_category + hourly_rate columns"""
    stored = profile.get("service_pricing")
    if isinstance(stored, dict) and stored:
        migrated = {}
        for category, entry in stored.items():
            if not isinstance(entry, dict):
                continue
            migrated[category] = build_service_pricing(
                entry.get("hourly_rate") or 0.0, entry.get("min_booking_hours") or DEFAULT_MIN_BOOKING_HOURS
            )
        return migrated

    legacy_category = profile.get("service_category")
    legacy_rate = parse_rate(profile.get("hourly_rate"))
    if legacy_category and legacy_rate:
        return {legacy_category: build_service_pricing(legacy_rate, profile.get("min_booking_hours") or DEFAULT_MIN_BOOKING_HOURS)}

    return {}
