"""Canonical time-of-day handling for punches.

Every punch stored or merged by the engine is either ``None`` or a
two-digit ``HH:MM`` 24-hour string. The functions here never raise: garbage
in gives ``None`` out.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any, Optional

from ..core.constants import MINUTES_PER_DAY

_DATETIME_TIME_RE = re.compile(r"\d[T ](\d{1,2}):(\d{2})")
_LOCALE_TIME_RE = re.compile(r"^(\d{1,2})\s*[hH]\s*(\d{1,2})?\s*(?:min)?$")


def _canonical(hours: int, minutes: int) -> Optional[str]:
    if 0 <= hours < 24 and 0 <= minutes < 60:
        return f"{hours:02d}:{minutes:02d}"
    return None


def normalize_punch(raw: Any) -> Optional[str]:
    """Normalize a raw punch value into ``HH:MM`` or ``None``.

    Accepts full date-times (``2024-03-01T09:05:00.000Z``, ``2024-03-01 09:05``),
    ``HH:mm:ss``, ``H:mm``, ``9h05`` and ``datetime``/``time`` objects.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return _canonical(raw.hour, raw.minute)
    if isinstance(raw, time):
        return _canonical(raw.hour, raw.minute)

    text = str(raw).strip()
    if not text:
        return None

    m = _DATETIME_TIME_RE.search(text)
    if m:
        return _canonical(int(m.group(1)), int(m.group(2)))

    m = _LOCALE_TIME_RE.match(text)
    if m:
        return _canonical(int(m.group(1)), int(m.group(2) or 0))

    if ":" in text:
        parts = text.split(":")
        hours, minutes = parts[0].strip(), parts[1].strip()
        if hours.isdigit() and minutes.isdigit():
            return _canonical(int(hours), int(minutes))

    return None


def punch_to_minutes(raw: Any) -> Optional[int]:
    """Minutes since midnight, or None when the punch is empty/unparseable."""
    punch = normalize_punch(raw)
    if punch is None:
        return None
    hours, minutes = punch.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_punch(minutes: int) -> str:
    """Canonical ``HH:MM`` for a minute-of-day count."""
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_to_hhmm(minutes: Any) -> str:
    """Signed duration as ``HH:MM`` (``-01:30``), hours not wrapped at 24."""
    try:
        minutes = int(minutes)
    except (TypeError, ValueError):
        return "00:00"
    sign = "-" if minutes < 0 else ""
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_duration(minutes: Any) -> str:
    """Signed duration for display (``-1h 05m``)."""
    try:
        minutes = int(minutes)
    except (TypeError, ValueError):
        return "0h 00m"
    sign = "-" if minutes < 0 else ""
    minutes = abs(minutes)
    return f"{sign}{minutes // 60}h {minutes % 60:02d}m"


def normalize_date(raw: Any) -> Optional[date]:
    """Parse ISO dates, ISO date-times and ``dd/mm/yyyy`` into a date."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = str(raw).strip()
    if not text:
        return None

    try:
        if "/" in text:
            return datetime.strptime(text[:10], "%d/%m/%Y").date()
        return datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        return None
