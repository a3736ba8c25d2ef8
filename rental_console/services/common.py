"""Shared service helpers."""

from datetime import datetime, timezone
from typing import Optional

from ..models.store import Store


def _store() -> Store:
    """Get the singleton store instance."""
    return Store.instance()


def _now() -> datetime:
    """Wrapper for easier testing/mocking."""
    return datetime.now(timezone.utc)


def round2(x: float) -> float:
    return round(float(x), 2)


def to_float_safe(value) -> Optional[float]:
    """Safely convert to float; return None if invalid."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _lc(s):
    """Safe lowercase for case-insensitive compare."""
    return (s or "").lower()


def _clean(value) -> str:
    return (value or "").strip()
