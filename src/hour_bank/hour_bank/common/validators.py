from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number of minutes")


def optional_weekday(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    day = require_int(value, field_name)
    if not 1 <= day <= 6:
        raise ValidationError(f"{field_name} must be between 1 and 6")
    return day
