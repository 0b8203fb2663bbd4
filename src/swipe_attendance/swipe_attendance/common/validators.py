from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_CLOCK_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9])$")


def require_positive(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def is_valid_clock_format(value) -> bool:
    """True for a 24h ``HH:MM:SS`` string."""
    if not isinstance(value, str) or not value:
        return False
    return bool(_CLOCK_RE.match(value.strip()))
