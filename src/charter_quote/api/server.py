"""FastAPI server — fare quotes for the fishing-boat booking form.

Run with:
    uvicorn charter_quote.api.server:app --reload --port 8000

Or:
    python -m charter_quote.api.server

Endpoints:
    GET  /catalog        — the loaded plan / fare / rental catalog
    GET  /plans          — plan options for a trip type, with fares, times, rentals
    GET  /rate-type      — charter rate type for a date
    POST /quote          — price a (partial) selection
    POST /quote/summary  — price + summary text + email body + mailto link
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from charter_quote.api.formatter import (
    build_email_body,
    build_mailto,
    difficulty_text,
    render_summary,
)
from charter_quote.config.catalog import Catalog, Fare, RentalItem, TackleNote, TripType
from charter_quote.config.loader import load_catalog
from charter_quote.config.selection import PARTY_CATEGORIES, Selection
from charter_quote.config.settings import QuoteSettings, load_settings
from charter_quote.engine.plans import (
    difficulty_of,
    display_fare,
    plan_options,
    plan_times,
    rental_options,
    tackle_notes,
)
from charter_quote.engine.pricing import price_selection
from charter_quote.engine.rate_type import parse_day, resolve_rate_type
from charter_quote.models.results import PricingResult

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Fishing Boat Fare Quote API",
    version="1.0",
    description=(
        "Quotes shared-boat (乗合船) and charter (仕立て船) fares for the booking "
        "form: per-person fares, charter minimum price plus overage, rentals, "
        "and a pre-filled reservation email."
    ),
)

# The booking form is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_settings() -> QuoteSettings:
    return load_settings()


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    return load_catalog(get_settings().catalog_path)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class QuoteRequest(BaseModel):
    """Request body for /quote.  Missing fields use form defaults."""
    selection: Selection = Field(
        default_factory=Selection,
        description="Partial Selection JSON. Example: "
                    "{'trip_type': 'charter', 'plan': '午前アジ', 'date': '2026-10-16', 'men': 5}",
    )


class PlanInfo(BaseModel):
    """One plan option as shown on the form."""
    name: str
    fare: Fare | None
    meet: str = ""
    depart: str = ""
    difficulty: str | None = None
    difficulty_text: str = ""
    tackle: list[TackleNote] = Field(default_factory=list)
    rentals: dict[str, RentalItem] = Field(default_factory=dict)


class PlansResponse(BaseModel):
    trip_type: str
    plans: list[PlanInfo]


class RateTypeResponse(BaseModel):
    date: str | None
    rate_type: str


class SummaryResponse(BaseModel):
    """Response from /quote/summary."""
    result: PricingResult
    summary: str
    email_subject: str
    email_body: str
    mailto: str


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_selection(selection: Selection, catalog: Catalog, settings: QuoteSettings) -> Selection:
    """Fill in the plan when the request left it out (first option of the trip
    type) and clamp counts and quantities to ``settings.max_count``."""
    if selection.plan is None:
        options = plan_options(catalog, selection.trip_type)
        selection.plan = options[0] if options else None
    for category in PARTY_CATEGORIES:
        selection.set_count(category, getattr(selection, category), settings.max_count)
    for name, quantity in list(selection.rentals.items()):
        selection.set_rental(name, quantity, settings.max_count)
    return selection


def _plan_info(catalog: Catalog, trip_type: str, name: str) -> PlanInfo:
    times = plan_times(catalog, trip_type, name)
    difficulty = difficulty_of(catalog, trip_type, name)
    return PlanInfo(
        name=name,
        fare=display_fare(catalog, trip_type, name),
        meet=times.meet if times else "",
        depart=times.depart if times else "",
        difficulty=difficulty,
        difficulty_text=difficulty_text(difficulty),
        tackle=tackle_notes(catalog, trip_type, name),
        rentals=dict(rental_options(catalog, trip_type, name)),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "Fishing Boat Fare Quote API",
        "version": "1.0",
        "start_here": "GET /plans?trip_type=shared",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/catalog")
def get_catalog_json(catalog: Catalog = Depends(get_catalog)):
    """The full catalog as JSON (holidays as ISO dates)."""
    return catalog.model_dump(mode="json")


@app.get("/plans", response_model=PlansResponse)
def get_plans(
    trip_type: TripType = Query(default="shared", description="'shared' (乗合船) or 'charter' (仕立て船)"),
    catalog: Catalog = Depends(get_catalog),
):
    """Plan options for a trip type, in form order."""
    return PlansResponse(
        trip_type=trip_type,
        plans=[_plan_info(catalog, trip_type, name) for name in plan_options(catalog, trip_type)],
    )


@app.get("/rate-type", response_model=RateTypeResponse)
def get_rate_type(
    date: str | None = Query(default=None, description="Booking date, YYYY-MM-DD"),
    catalog: Catalog = Depends(get_catalog),
):
    """Charter rate type for a date.  Missing or malformed dates give 'weekday'."""
    day = parse_day(date)
    return RateTypeResponse(
        date=day.isoformat() if day else None,
        rate_type=resolve_rate_type(day, catalog.holidays),
    )


@app.post("/quote", response_model=PricingResult)
def quote(
    req: QuoteRequest,
    catalog: Catalog = Depends(get_catalog),
    settings: QuoteSettings = Depends(get_settings),
):
    """Price a selection.  Send only the fields you want to set."""
    selection = _build_selection(req.selection, catalog, settings)
    return price_selection(selection, catalog)


@app.post("/quote/summary", response_model=SummaryResponse)
def quote_summary(
    req: QuoteRequest,
    catalog: Catalog = Depends(get_catalog),
    settings: QuoteSettings = Depends(get_settings),
):
    """Price a selection and render the summary, email body and mailto link."""
    selection = _build_selection(req.selection, catalog, settings)
    result = price_selection(selection, catalog)
    body = build_email_body(selection, result, catalog)
    return SummaryResponse(
        result=result,
        summary=render_summary(selection, result, catalog),
        email_subject=settings.mail_subject,
        email_body=body,
        mailto=build_mailto(settings.mail_to, settings.mail_subject, body),
    )


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Serving quotes from catalog %s", settings.catalog_path)
    uvicorn.run(
        "charter_quote.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
