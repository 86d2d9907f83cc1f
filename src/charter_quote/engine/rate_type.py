"""Rate-type resolution — which charter tariff applies on a given day.

Holiday clusters are billed like a weekend block:

  * ordinary Saturday                        → saturday
  * ordinary Sunday                          → sunday, or saturday when
                                               Monday is a holiday
  * isolated holiday                         → sunday (saturday on a Friday)
  * first / interior day of a holiday run    → saturday
  * last day of a holiday run                → sunday
  * anything else                            → weekday

Missing or unparseable dates resolve to ``weekday``; nothing here raises.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Collection
from typing import Any

from charter_quote.config.catalog import RateType

logger = logging.getLogger(__name__)

_ONE_DAY = dt.timedelta(days=1)
_FRIDAY, _SATURDAY, _SUNDAY = 4, 5, 6


def parse_day(value: Any) -> dt.date | None:
    """Best-effort conversion of a booking date to ``datetime.date``."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            logger.debug("Unparseable booking date %r; using weekday rate", value)
            return None
    logger.debug("Unsupported booking date type %s; using weekday rate", type(value).__name__)
    return None


def holiday_run(day: dt.date, holidays: Collection[dt.date]) -> tuple[dt.date, dt.date]:
    """Maximal run of consecutive holidays containing ``day``.

    Returns ``(day, day)`` when ``day`` is isolated (or not a holiday).
    """
    start = end = day
    while start > dt.date.min and start - _ONE_DAY in holidays:
        start -= _ONE_DAY
    while end < dt.date.max and end + _ONE_DAY in holidays:
        end += _ONE_DAY
    return start, end


def resolve_rate_type(value: Any, holidays: Collection[dt.date] | None = None) -> RateType:
    """Resolve the rate type for a booking date against a holiday calendar."""
    day = parse_day(value)
    if day is None:
        return "weekday"
    holidays = holidays or frozenset()
    weekday = day.weekday()

    if day not in holidays:
        if weekday == _SATURDAY:
            return "saturday"
        if weekday == _SUNDAY:
            # Sunday before a holiday Monday is mid-block
            return "saturday" if day < dt.date.max and day + _ONE_DAY in holidays else "sunday"
        return "weekday"

    start, end = holiday_run(day, holidays)
    if start == end:
        return "saturday" if weekday == _FRIDAY else "sunday"
    if day == end:
        return "sunday"
    # first or interior day
    return "saturday"
