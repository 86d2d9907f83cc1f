"""Booking-form selection — the one mutable object in the system.

The UI layer owns a single ``Selection`` and mutates it on every input
event; the pricing engine reads it wholesale.  The ``change_*`` / ``set_*``
helpers are the input boundary: they clamp counts and quantities and keep
rental quantities consistent with the offered rental list.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from charter_quote.config.catalog import Catalog, TripType

logger = logging.getLogger(__name__)

PARTY_CATEGORIES: tuple[str, ...] = ("men", "women", "student")
MAX_COUNT = 100


def clamp_count(value: Any, upper: int = MAX_COUNT) -> int:
    """Coerce a raw form value into ``[0, upper]``.  Garbage becomes 0."""
    try:
        number = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(0, min(upper, number))


class Selection(BaseModel):
    """Current booking-form input."""

    trip_type: TripType = "shared"
    plan: str | None = None
    date: dt.date | None = Field(default_factory=dt.date.today)
    men: int = Field(default=0, ge=0, le=MAX_COUNT)
    women: int = Field(default=0, ge=0, le=MAX_COUNT)
    student: int = Field(default=0, ge=0, le=MAX_COUNT)
    rentals: dict[str, int] = Field(default_factory=dict, description="Rental name → quantity")

    @field_validator("date", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        if isinstance(value, str):
            try:
                return dt.date.fromisoformat(value.strip())
            except ValueError:
                logger.debug("Ignoring malformed booking date %r", value)
                return None
        return value

    @field_validator("men", "women", "student", mode="before")
    @classmethod
    def _clamp_counts(cls, value: Any) -> int:
        return clamp_count(value)

    @field_validator("rentals", mode="before")
    @classmethod
    def _clamp_rentals(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        return {str(name): clamp_count(qty) for name, qty in value.items()}

    @property
    def total_people(self) -> int:
        return sum(max(0, getattr(self, c) or 0) for c in PARTY_CATEGORIES)

    # ── Input-boundary mutators ─────────────────────────────────────────

    def set_count(self, category: str, value: Any, upper: int = MAX_COUNT) -> None:
        if category not in PARTY_CATEGORIES:
            raise ValueError(f"Unknown party category: {category!r}")
        setattr(self, category, clamp_count(value, upper))

    def set_rental(self, name: str, quantity: Any, upper: int = MAX_COUNT) -> None:
        self.rentals[name] = clamp_count(quantity, upper)

    def change_trip_type(self, catalog: Catalog, trip_type: TripType) -> None:
        """Switch trip type; the plan moves to the first option of the new type."""
        from charter_quote.engine.plans import plan_options

        self.trip_type = trip_type
        options = plan_options(catalog, trip_type)
        self.change_plan(catalog, options[0] if options else None)

    def change_plan(self, catalog: Catalog, plan: str | None) -> None:
        """Switch plan and reset rental quantities to the plan's offered list."""
        from charter_quote.engine.plans import rental_options

        self.plan = plan
        self.rentals = {name: 0 for name, _ in rental_options(catalog, self.trip_type, plan)}

    def reset(self, catalog: Catalog, today: dt.date | None = None) -> None:
        """Restore form defaults: shared trip, today, nobody aboard."""
        self.men = self.women = self.student = 0
        self.date = today or dt.date.today()
        self.change_trip_type(catalog, "shared")


def new_selection(catalog: Catalog, today: dt.date | None = None) -> Selection:
    """Fresh selection for a new form session."""
    selection = Selection(date=today or dt.date.today())
    selection.change_trip_type(catalog, "shared")
    return selection
