from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DMY_DAY = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def _calendar_day(value: datetime) -> str:
    # aware timestamps count on the UTC calendar; naive ones as written
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def normalize_date(value: Any) -> Optional[str]:
    """Reduce a date-like value to ``YYYY-MM-DD``.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD``, ``dd/mm/yyyy`` and
    ISO-8601 timestamps; a timestamp with an offset yields its UTC day.
    Returns None when the value is not a valid calendar date, so callers can
    fail closed.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return _calendar_day(value)
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None

    v = value.strip()
    if not v:
        return None
    try:
        if _ISO_DAY.match(v):
            return parse_iso_date(v).isoformat()
        if _DMY_DAY.match(v):
            return datetime.strptime(v, "%d/%m/%Y").date().isoformat()
        if v.endswith("Z"):
            v = v[:-1] + "+00:00"
        return _calendar_day(datetime.fromisoformat(v))
    except ValueError:
        return None
