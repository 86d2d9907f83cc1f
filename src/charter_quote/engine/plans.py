"""Plan queries — what the booking form offers for a trip type / plan.

Everything here reads explicit catalog attributes (difficulty, session,
tackle, ``replaces``); nothing inspects plan-name text.
"""

from __future__ import annotations

from charter_quote.config.catalog import (
    Catalog,
    Difficulty,
    Fare,
    PlanEntry,
    RentalItem,
    SessionTimes,
    TackleNote,
)


def plan_options(catalog: Catalog, trip_type: str) -> list[str]:
    """Plan names offered for a trip type.

    Charters may be booked on any shared-boat plan too: charter names come
    first, then shared names not already listed.
    """
    if trip_type == "charter":
        names = list(catalog.charter)
        names.extend(name for name in catalog.shared if name not in catalog.charter)
        return names
    return list(catalog.table(trip_type))


def find_plan(catalog: Catalog, trip_type: str, plan: str | None) -> PlanEntry | None:
    """Plan entry from the trip type's table, falling back to the shared table."""
    if not plan:
        return None
    entry = catalog.table(trip_type).get(plan)
    if entry is None:
        entry = catalog.shared.get(plan)
    return entry


def reference_fare(catalog: Catalog, plan: str | None) -> Fare | None:
    """Shared-boat fare for a plan — the basis of every per-person charge."""
    entry = catalog.shared.get(plan) if plan else None
    return entry.fare if entry else None


def display_fare(catalog: Catalog, trip_type: str, plan: str | None) -> Fare | None:
    """Unit prices shown beside the party inputs."""
    entry = catalog.table(trip_type).get(plan) if plan else None
    if entry is not None and entry.fare is not None:
        return entry.fare
    return reference_fare(catalog, plan)


def plan_times(catalog: Catalog, trip_type: str, plan: str | None) -> SessionTimes | None:
    """Meeting / departure times for the plan's session."""
    entry = find_plan(catalog, trip_type, plan)
    if entry is None:
        return None
    return catalog.sessions.get(entry.session)


def difficulty_of(catalog: Catalog, trip_type: str, plan: str | None) -> Difficulty | None:
    entry = find_plan(catalog, trip_type, plan)
    if entry is None:
        return None
    if entry.difficulty is None and trip_type == "charter" and plan in catalog.shared:
        return catalog.shared[plan].difficulty
    return entry.difficulty


def tackle_notes(catalog: Catalog, trip_type: str, plan: str | None) -> list[TackleNote]:
    entry = find_plan(catalog, trip_type, plan)
    if entry is None:
        return []
    if not entry.tackle and trip_type == "charter" and plan in catalog.shared:
        return list(catalog.shared[plan].tackle)
    return list(entry.tackle)


def rental_options(catalog: Catalog, trip_type: str, plan: str | None) -> list[tuple[str, RentalItem]]:
    """Rentals offered for a plan, in display order, without duplicates.

    1. plan-specific rentals (trip type's table, else the shared table)
    2. charter only: the same-named shared plan's rentals
    3. common rentals, minus anything a plan-specific item ``replaces``

    Informational-only names are dropped wherever they appear.
    """
    offered: dict[str, RentalItem] = {}
    entry = find_plan(catalog, trip_type, plan)
    if entry is not None:
        offered.update(entry.rental)

    if trip_type == "charter" and plan in catalog.shared:
        for name, item in catalog.shared[plan].rental.items():
            offered.setdefault(name, item)

    superseded = {name for item in offered.values() for name in item.replaces}
    for name, item in catalog.common_rental.items():
        if name not in superseded:
            offered.setdefault(name, item)

    return [(name, item) for name, item in offered.items() if name not in catalog.info_only_rentals]
