"""Rental pricing — identical for shared and charter trips.

Unit price precedence for a rental name:
  1. the plan's rental table in the *current* trip type
  2. the same-named shared-boat plan's rental table
  3. the common rental table
A name none of them prices contributes 0.
"""

from __future__ import annotations

from collections.abc import Mapping

from charter_quote.config.catalog import Catalog, RentalItem
from charter_quote.models.results import RentalLine


def as_quantity(value: object) -> int:
    """Non-negative int from whatever leaked past the input boundary."""
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def resolve_rental(catalog: Catalog, trip_type: str, plan: str | None, name: str) -> RentalItem | None:
    """Find the rental record that prices ``name`` for this trip type / plan."""
    if plan:
        entry = catalog.table(trip_type).get(plan)
        if entry is not None and name in entry.rental:
            return entry.rental[name]
        shared = catalog.shared.get(plan)
        if shared is not None and name in shared.rental:
            return shared.rental[name]
    return catalog.common_rental.get(name)


def compute_rental_lines(
    catalog: Catalog,
    trip_type: str,
    plan: str | None,
    quantities: Mapping[str, int] | None,
) -> tuple[list[RentalLine], int]:
    """Price every rental with quantity > 0.

    Returns ``(lines, rental_total)``.  Informational-only names are skipped
    entirely; negative quantities are treated as zero.
    """
    lines: list[RentalLine] = []
    rental_total = 0
    for name, raw_qty in (quantities or {}).items():
        if name in catalog.info_only_rentals:
            continue
        qty = as_quantity(raw_qty)
        if qty <= 0:
            continue

        item = resolve_rental(catalog, trip_type, plan, name)
        price = item.price if item else 0
        refund = (item.refund or 0) if item else 0
        amount = price * qty if price > 0 else 0
        rental_total += amount

        lines.append(RentalLine(
            name=name,
            quantity=qty,
            unit_price=price,
            amount=amount,
            refund_per_unit=refund,
            refund_total=refund * qty,
        ))
    return lines, rental_total
