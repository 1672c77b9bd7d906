from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_positive_id(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not valid")
    if number <= 0:
        raise ValidationError(f"{field_name} is not valid")
    return number


def optional_positive_id(value, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    return require_positive_id(value, field_name)


def clean_note(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
