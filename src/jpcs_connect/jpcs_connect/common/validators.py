from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Optional[str]) -> str:
    return str(value).strip() if value else ""


def require_choice(value: str, field_name: str, choices) -> str:
    if value not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(sorted(choices))}")
    return value
