"""Pricing engine — Selection + Catalog → PricingResult.

Shared boat (乗合船):
    subtotal = Σ count × fare[category]

Charter (仕立て船), minimum price plus overage:
    min_price = shared men fare × min_people   (stored min_price if no fare)
    subtotal  = min_price
              + extra passengers charged per category in CATEGORY_ORDER
    Fewer passengers than min_people never lowers the price.

Both:
    total = subtotal + rental_total

Pure function of its inputs: no caching, no hidden state, never raises for
missing catalog data.
"""

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP

from charter_quote.config.catalog import Catalog, CharterRule, Fare
from charter_quote.config.selection import Selection
from charter_quote.engine.plans import reference_fare
from charter_quote.engine.rate_type import resolve_rate_type
from charter_quote.engine.rentals import as_quantity, compute_rental_lines
from charter_quote.models.results import CategoryCharge, PricingBreakdown, PricingResult

logger = logging.getLogger(__name__)

CATEGORY_ORDER: tuple[str, ...] = ("men", "women", "student")
"""Order in which passengers beyond the charter minimum are charged."""

_ZERO_FARE = Fare()


def find_charter_rule(catalog: Catalog, plan: str | None, rate_type: str) -> CharterRule | None:
    """Charter rule for (plan, rate type).

    A saturday rate also accepts a ``holiday`` rule.  Per key, the selected
    plan wins; otherwise the catalog's default charter plan supplies it.
    """
    keys = ("saturday", "holiday") if rate_type == "saturday" else (rate_type,)
    selected = catalog.charter.get(plan) if plan else None
    fallback = (
        catalog.charter.get(catalog.default_charter_plan)
        if catalog.default_charter_plan
        else None
    )
    for key in keys:
        if selected is not None and selected.rule_for(key) is not None:
            return selected.rule_for(key)
        if fallback is not None and fallback.rule_for(key) is not None:
            logger.debug(
                "No %s rule for charter plan %r; using default plan %r",
                key, plan, catalog.default_charter_plan,
            )
            return fallback.rule_for(key)
    return None


def allocate_extra(
    extra: int,
    counts: dict[str, int],
    fare: Fare,
    order: tuple[str, ...] = CATEGORY_ORDER,
) -> list[CategoryCharge]:
    """Charge ``extra`` passengers category by category in ``order``.

    Each category absorbs ``min(count, remaining)`` passengers at its own
    fare.  Anything left once the categories run out is charged at the
    half-up-rounded mean of the three fares.
    """
    charges: list[CategoryCharge] = []
    remaining = extra
    for category in order:
        if remaining <= 0:
            break
        count = counts.get(category, 0)
        if count <= 0:
            continue
        charged = min(count, remaining)
        unit = fare.for_category(category)
        charges.append(CategoryCharge(category=category, count=charged, unit_price=unit, amount=charged * unit))
        remaining -= charged

    if remaining > 0:
        mean = Decimal(fare.men + fare.women + fare.student) / 3
        average = int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        charges.append(CategoryCharge(
            category="average", count=remaining, unit_price=average, amount=remaining * average,
        ))
    return charges


def _shared_fare_charges(counts: dict[str, int], fare: Fare) -> list[CategoryCharge]:
    return [
        CategoryCharge(
            category=category,
            count=counts[category],
            unit_price=fare.for_category(category),
            amount=counts[category] * fare.for_category(category),
        )
        for category in CATEGORY_ORDER
        if counts[category] > 0
    ]


def price_selection(selection: Selection, catalog: Catalog) -> PricingResult:
    """Quote one selection snapshot against the catalog."""
    counts = {category: as_quantity(getattr(selection, category, 0)) for category in CATEGORY_ORDER}
    total_people = sum(counts.values())
    plan = selection.plan
    trip_type = selection.trip_type

    # ── Rentals (both trip types) ──────────────────────────────────────
    rental_lines, rental_total = compute_rental_lines(catalog, trip_type, plan, selection.rentals)

    fare = reference_fare(catalog, plan) or _ZERO_FARE
    breakdown = PricingBreakdown(total_people=total_people, **counts)
    rate_type: str | None = None
    pricing_available = True
    subtotal = 0

    if trip_type == "shared":
        # ── Per-person fare ────────────────────────────────────────────
        breakdown.category_charges = _shared_fare_charges(counts, fare)
        subtotal = sum(c.amount for c in breakdown.category_charges)

    elif trip_type == "charter":
        # ── Minimum price + overage ────────────────────────────────────
        rate_type = resolve_rate_type(selection.date, catalog.holidays)
        rule = find_charter_rule(catalog, plan, rate_type)

        if rule is None:
            logger.debug("No charter rule for plan %r on %s; pricing unavailable", plan, rate_type)
            pricing_available = False
        else:
            min_people = rule.min_people
            if fare.men and min_people:
                min_price = fare.men * min_people
            else:
                min_price = rule.min_price or 0

            subtotal = min_price
            breakdown.min_people_used = min_people
            breakdown.min_price_used = min_price

            if total_people > min_people:
                extra = total_people - min_people
                breakdown.category_charges = allocate_extra(extra, counts, fare)
                subtotal += sum(c.amount for c in breakdown.category_charges)
                breakdown.extra_count = extra
                breakdown.extra_charge_amount = subtotal - min_price
            elif total_people < min_people:
                breakdown.shortage_count = min_people - total_people

    return PricingResult(
        trip_type=trip_type,
        plan=plan,
        rate_type=rate_type,
        pricing_available=pricing_available,
        subtotal=subtotal,
        rental_total=rental_total,
        total=subtotal + rental_total,
        breakdown=breakdown,
        rental_lines=rental_lines,
    )
