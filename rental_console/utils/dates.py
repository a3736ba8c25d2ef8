"""Parsing helpers for the delivery/collection instants and hour tolerance."""
from datetime import date, datetime, timezone
from typing import Optional, Union

from ..exceptions import InvalidInputError, InvalidToleranceError
from .constants import DEFAULT_HOUR_TOLERANCE, MAX_HOUR_TOLERANCE, MIN_HOUR_TOLERANCE

InstantLike = Union[str, datetime, date, None]


def parse_instant(value: InstantLike, field: str = "timestamp") -> datetime:
    """
    Parse a timestamp into an aware datetime.
    Supports:
      - datetime / date objects
      - 'YYYY-MM-DDTHH:MM' (what <input type="datetime-local"> submits)
      - 'YYYY-MM-DD HH:MM:SS'
      - Above with 'Z' or offsets like '+01:00'
    Naive values are taken as UTC. Raises InvalidInputError when missing or unparseable.
    """
    if value is None:
        raise InvalidInputError(f"Missing {field}")

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            raise InvalidInputError(f"Missing {field}")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            raise InvalidInputError(f"Invalid {field}: {value!r}") from None
    else:
        raise InvalidInputError(f"Unsupported {field}: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_tolerance(value: Optional[Union[str, int, float]]) -> int:
    """Coerce the hour tolerance to an int in [1, 12]; blank means the default of 1 hour."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_HOUR_TOLERANCE
    if isinstance(value, bool):
        raise InvalidToleranceError(f"Invalid tolerance: {value!r}")

    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise InvalidToleranceError(f"Invalid tolerance: {value!r}") from None
    if not hours.is_integer():
        raise InvalidToleranceError("Tolerance must be a whole number of hours")

    hours = int(hours)
    if hours < MIN_HOUR_TOLERANCE:
        raise InvalidToleranceError("Minimum tolerance is 1 hour")
    if hours > MAX_HOUR_TOLERANCE:
        raise InvalidToleranceError("Maximum tolerance is 12 hours")
    return hours


def combine_time(day: datetime, hhmm: str, field: str = "time") -> datetime:
    """Replace the time of day of `day` with 'HH:MM'; raise InvalidInputError on bad input."""
    try:
        hours, minutes = (int(p) for p in (hhmm or "").strip().split(":"))
    except ValueError:
        raise InvalidInputError(f"Invalid {field}: {hhmm!r}") from None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise InvalidInputError(f"Invalid {field}: {hhmm!r}")
    return day.replace(hour=hours, minute=minutes, second=0, microsecond=0)
