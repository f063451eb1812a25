from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import pendulum

from notes_browser.core.models import Timestamp
from notes_browser.settings import APP_NAME

log = logging.getLogger(f"{APP_NAME}.time")


def parse_timestamp(value: Timestamp) -> Optional[pendulum.DateTime]:
    """
    Best-effort: ISO-8601 string, datetime (naive = UTC) or epoch seconds.
    Returns None for anything that is not a point in time.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            return pendulum.instance(value)
        if isinstance(value, (int, float)):
            return pendulum.from_timestamp(value)
        if isinstance(value, str):
            if not value.strip():
                return None
            parsed = pendulum.parse(value.strip())
            # "P1D" parses to a Duration, "10:00" may parse to a Time
            return parsed if isinstance(parsed, pendulum.DateTime) else None
    except (ValueError, TypeError, OverflowError, OSError):
        log.debug("Unparseable timestamp: %r", value)
        return None
    return None


def relative_time(value: Timestamp, *, placeholder: str = "recently") -> str:
    """
    "2 hours ago", "in 3 days", "a few seconds ago".
    Computed against the current time on every call.
    """
    dt = parse_timestamp(value)
    if dt is None:
        return placeholder
    return dt.diff_for_humans()
