from __future__ import annotations
from typing import Optional

from app.exceptions import ValidationException

__all__ = ["is_blank", "require_params", "parse_bool"]


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty and whitespace-only strings."""
    return value is None or not str(value).strip()


def require_params(operation: str, **params: Optional[str]) -> None:
    """Raise ValidationException naming every blank parameter of an operation."""
    missing = [name for name, value in params.items() if is_blank(value)]
    if missing:
        names = ", ".join(f"'{name}'" for name in params)
        raise ValidationException(
            f"'{operation}' requires {names}; missing: {', '.join(missing)}."
        )


def parse_bool(value: str | bool | None, default: bool = False) -> bool:
    """Lenient boolean parsing: 'true'/'false' in any case, anything else is the default."""
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return default
