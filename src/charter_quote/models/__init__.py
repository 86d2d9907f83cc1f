"""Result models — pricing output contracts."""

from charter_quote.models.results import (
    CategoryCharge,
    PricingBreakdown,
    PricingResult,
    RentalLine,
)

__all__ = [
    "CategoryCharge",
    "PricingBreakdown",
    "PricingResult",
    "RentalLine",
]
