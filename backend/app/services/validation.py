"""
Required-field checks shared by the resource services.

A value counts as missing when it is None, an empty string, or an empty
list/dict. Zero is missing too for chapter/verse style numbering, which
starts at 1.
"""

from typing import Any, Iterable, Mapping

from app.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (str, list, dict, tuple)):
        return len(value) == 0
    if isinstance(value, int):
        return value == 0
    return False


def require_fields(
    values: Mapping[str, Any],
    required: Iterable[str],
    message: str,
) -> None:
    """Raise ValidationError naming every required field that is blank."""
    missing = [name for name in required if is_blank(values.get(name))]
    if missing:
        raise ValidationError(message=message, fields=missing)
