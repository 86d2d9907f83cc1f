"""Runtime settings — catalog location, reservation mailbox, form limits."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

ENV_PREFIX = "CHARTER_QUOTE_"

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.yaml"


class QuoteSettings(BaseModel):
    """Settings shared by the API server and the booking-form dashboard."""

    catalog_path: Path = Field(default=DEFAULT_CATALOG_PATH, description="YAML catalog file")
    mail_to: str = Field(default="yoyaku@example.com", description="Reservation mailbox")
    mail_subject: str = Field(default="釣り船予約依頼", description="Reservation email subject")
    max_count: int = Field(default=100, ge=1, description="Upper bound for counts and quantities")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


def load_settings(environ: dict[str, str] | None = None) -> QuoteSettings:
    """Build settings from ``CHARTER_QUOTE_*`` environment variables over defaults.

    ``CHARTER_QUOTE_CATALOG_PATH=/srv/catalog.yaml`` overrides ``catalog_path``,
    and so on for every field.
    """
    env = os.environ if environ is None else environ
    overrides = {
        name: env[ENV_PREFIX + name.upper()]
        for name in QuoteSettings.model_fields
        if ENV_PREFIX + name.upper() in env
    }
    return QuoteSettings(**overrides)
