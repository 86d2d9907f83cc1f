"""Result types — the contract between the pricing engine and its consumers.

The engine builds a fresh ``PricingResult`` on every call; nothing here is
updated incrementally.  Formatting lives in ``charter_quote.api.formatter``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CategoryCharge(BaseModel):
    """One party-category line: count × unit price."""

    category: str
    """``men`` / ``women`` / ``student``, or ``average`` for an unallocated residual."""
    count: int
    unit_price: int
    amount: int


class RentalLine(BaseModel):
    """One rental with quantity > 0."""

    name: str
    quantity: int
    unit_price: int
    """0 when no table prices the item."""
    amount: int
    refund_per_unit: int = 0
    refund_total: int = 0
    """Paid back on return.  Informational — not deducted from the total."""


class PricingBreakdown(BaseModel):
    """Party composition and charter minimum/overage bookkeeping."""

    men: int = 0
    women: int = 0
    student: int = 0
    total_people: int = 0

    # --- Charter only ---
    min_people_used: int = 0
    min_price_used: int = 0
    extra_count: int = 0
    """Passengers beyond ``min_people_used``."""
    extra_charge_amount: int = 0
    """subtotal − min_price_used."""
    shortage_count: int = 0
    """Seats covered by the minimum but unoccupied.  Display only."""

    category_charges: list[CategoryCharge] = Field(default_factory=list)
    """Shared: one line per non-zero category.  Charter: the overage allocation."""


class PricingResult(BaseModel):
    """Complete quote for one selection snapshot.

    Invariant: ``total == subtotal + rental_total``.
    """

    trip_type: str
    plan: str | None = None
    rate_type: str | None = None
    """Resolved rate type (charter quotes only)."""
    pricing_available: bool = True
    """False when a charter quote found no rule at all (subtotal forced to 0)."""

    subtotal: int = 0
    rental_total: int = 0
    total: int = 0

    breakdown: PricingBreakdown = Field(default_factory=PricingBreakdown)
    rental_lines: list[RentalLine] = Field(default_factory=list)

    @property
    def refund_total(self) -> int:
        return sum(line.refund_total for line in self.rental_lines)
