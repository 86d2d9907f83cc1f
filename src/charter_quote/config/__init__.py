"""Configuration models — catalog, selection, settings."""

from charter_quote.config.catalog import (
    Catalog,
    CharterRule,
    Fare,
    PlanEntry,
    RentalItem,
    TackleNote,
)
from charter_quote.config.selection import Selection, new_selection
from charter_quote.config.settings import QuoteSettings, load_settings
from charter_quote.config.loader import CatalogNotFoundError, load_catalog, parse_catalog

__all__ = [
    "Catalog",
    "CharterRule",
    "Fare",
    "PlanEntry",
    "RentalItem",
    "TackleNote",
    "Selection",
    "new_selection",
    "QuoteSettings",
    "load_settings",
    "CatalogNotFoundError",
    "load_catalog",
    "parse_catalog",
]
