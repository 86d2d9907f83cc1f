"""Engine — rate-type resolution, rental pricing, plan queries, quote computation."""

from charter_quote.engine.rate_type import holiday_run, parse_day, resolve_rate_type
from charter_quote.engine.rentals import compute_rental_lines, resolve_rental
from charter_quote.engine.plans import (
    difficulty_of,
    display_fare,
    find_plan,
    plan_options,
    plan_times,
    reference_fare,
    rental_options,
    tackle_notes,
)
from charter_quote.engine.pricing import (
    CATEGORY_ORDER,
    allocate_extra,
    find_charter_rule,
    price_selection,
)

__all__ = [
    "holiday_run",
    "parse_day",
    "resolve_rate_type",
    "compute_rental_lines",
    "resolve_rental",
    "difficulty_of",
    "display_fare",
    "find_plan",
    "plan_options",
    "plan_times",
    "reference_fare",
    "rental_options",
    "tackle_notes",
    "CATEGORY_ORDER",
    "allocate_extra",
    "find_charter_rule",
    "price_selection",
]
