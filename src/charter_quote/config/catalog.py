"""Plan / fare catalog — the read-only price tables behind the booking form.

Layout mirrors the YAML data file:

    shared:          plan name → PlanEntry   (乗合船, per-person fares)
    charter:         plan name → PlanEntry   (仕立て船, minimum-price rules)
    common_rental:   rental name → RentalItem
    holidays:        list of ISO dates

The shared table doubles as the *reference* table: charter pricing, rental
fallback and displayed unit prices all consult the same-named shared plan.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

TripType = Literal["shared", "charter"]
RateType = Literal["weekday", "saturday", "sunday"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
Session = Literal["morning", "afternoon"]

TRIP_TYPE_LABELS: dict[str, str] = {
    "shared": "乗合船",
    "charter": "仕立て船",
}


def _coerce_rental(value: Any) -> Any:
    """Rentals may be written as a bare price (``竿: 1000``) or a mapping."""
    if isinstance(value, (int, float)):
        return {"price": value}
    return value


class Fare(BaseModel):
    """Per-person shared-boat fare (yen)."""

    men: int = Field(default=0, ge=0, description="Adult male fare (円)")
    women: int = Field(default=0, ge=0, description="Adult female fare (円)")
    student: int = Field(default=0, ge=0, description="High-school student and under (円)")

    def for_category(self, category: str) -> int:
        return getattr(self, category, 0) or 0


class RentalItem(BaseModel):
    """One rentable item.  ``refund`` is paid back per unit on return."""

    price: int = Field(default=0, ge=0, description="Unit rental price (円)")
    refund: int | None = Field(
        default=None, ge=0,
        description="Per-unit refund when the item is returned (円). Informational only — "
                    "never subtracted from the quoted total.",
    )
    replaces: list[str] = Field(
        default_factory=list,
        description="Common-rental names this plan-specific item supersedes in the "
                    "offered list (e.g. a dedicated rod hides the generic rod set).",
    )


class CharterRule(BaseModel):
    """Minimum headcount / minimum price for one charter plan on one rate type."""

    min_people: int = Field(default=0, ge=0, description="Headcount covered by the minimum price")
    min_price: int | None = Field(
        default=None, ge=0,
        description="Stored minimum price (円). Only used when the shared-boat men "
                    "fare for the plan is unavailable.",
    )


class TackleNote(BaseModel):
    """Terminal tackle / bait guidance shown next to a plan.  Never priced."""

    name: str
    price: int = Field(default=0, ge=0)
    note: str = ""


class PlanEntry(BaseModel):
    """One plan in either trip-type table."""

    fare: Fare | None = None
    rental: dict[str, RentalItem] = Field(default_factory=dict)

    # --- charter rules, keyed by rate type ("holiday" is a saturday synonym) ---
    weekday: CharterRule | None = None
    saturday: CharterRule | None = None
    sunday: CharterRule | None = None
    holiday: CharterRule | None = None

    # --- explicit plan attributes ---
    difficulty: Difficulty | None = Field(
        default=None, description="Difficulty tier shown after the plan is selected",
    )
    session: Session = Field(default="morning", description="Selects meeting/departure times")
    tackle: list[TackleNote] = Field(default_factory=list)

    @field_validator("rental", mode="before")
    @classmethod
    def _normalise_rentals(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {name: _coerce_rental(item) for name, item in value.items()}
        return value or {}

    def rule_for(self, key: str) -> CharterRule | None:
        if key not in ("weekday", "saturday", "sunday", "holiday"):
            return None
        return getattr(self, key)


class SessionTimes(BaseModel):
    meet: str
    depart: str


def _default_sessions() -> dict[str, SessionTimes]:
    return {
        "morning": SessionTimes(meet="06:30", depart="07:00"),
        "afternoon": SessionTimes(meet="12:30", depart="13:00"),
    }


class Catalog(BaseModel):
    """Complete read-only price data for one booking form."""

    shared: dict[str, PlanEntry] = Field(default_factory=dict)
    charter: dict[str, PlanEntry] = Field(default_factory=dict)
    common_rental: dict[str, RentalItem] = Field(default_factory=dict)
    holidays: set[dt.date] = Field(default_factory=set)

    default_charter_plan: str | None = Field(
        default="午前アジ",
        description="Charter plan whose rules apply when the selected plan has no "
                    "rule for the resolved rate type",
    )
    info_only_rentals: list[str] = Field(
        default_factory=lambda: ["仕掛け"],
        description="Rental names that are informational only and never priced",
    )
    sessions: dict[str, SessionTimes] = Field(default_factory=_default_sessions)

    @field_validator("shared", "charter", mode="before")
    @classmethod
    def _empty_table(cls, value: Any) -> Any:
        return value or {}

    @field_validator("common_rental", mode="before")
    @classmethod
    def _normalise_common(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {name: _coerce_rental(item) for name, item in value.items()}
        return value or {}

    @field_validator("holidays", mode="before")
    @classmethod
    def _empty_holidays(cls, value: Any) -> Any:
        return value or set()

    def table(self, trip_type: str) -> dict[str, PlanEntry]:
        """Plan table for a trip type (empty for unknown types)."""
        if trip_type == "shared":
            return self.shared
        if trip_type == "charter":
            return self.charter
        return {}
