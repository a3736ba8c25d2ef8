"""Jinja filters and date formatting helpers."""
from datetime import datetime, timezone

import pytz
from flask import current_app


def _display_tz():
    name = current_app.config.get("DISPLAY_TZ") or "UTC"
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        current_app.logger.warning("Unknown DISPLAY_TZ %r, falling back to UTC", name)
        return pytz.utc


def fmt_iso_local(value, use_12h: bool = False) -> str:
    """
    Format a stored instant in the configured display timezone.
    Supports:
      - 'YYYY-MM-DDTHH:MM' (how bookings are stored, UTC)
      - 'YYYY-MM-DD HH:MM:SS'
      - Above with 'Z' or timezone offsets like '+00:00'
    On parse error, returns the original value (so the UI never goes blank).
    """
    if value is None:
        return ""

    s = str(value).strip()
    if not s:
        return ""

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return str(value)

    # Naive values are stored in UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    local = dt.astimezone(_display_tz())

    if use_12h:
        # Avoid %-I (not portable on Windows)
        hh = local.strftime("%I").lstrip("0") or "0"
        return f"{local.strftime('%d %b %Y')}, {hh}:{local.strftime('%M %p')}"
    return local.strftime("%d/%m/%Y %H:%M")


def fmt_money(value) -> str:
    try:
        return f"{float(value):,.2f}"
    except (TypeError, ValueError):
        return ""
