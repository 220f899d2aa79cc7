from __future__ import annotations

from typing import Any, Iterable, List, Optional

from ..core.exceptions import ValidationError


def _check_length(text: str, field_name: str, max_len: Optional[int]) -> str:
    if max_len is not None and len(text) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return text


def require_non_empty(value: Any, field_name: str, *, max_len: Optional[int] = None) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return _check_length(value.strip(), field_name, max_len)


def optional_text(value: Any, field_name: str, *, max_len: Optional[int] = None) -> str:
    """Free-text field: missing/None becomes an empty string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return _check_length(value, field_name, max_len)


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    # bool is an int subclass; floats must be whole numbers
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} is invalid")
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if ident <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return ident


def string_list(value: Any, field_name: str, *, max_len: Optional[int] = None) -> List[str]:
    """Trim, drop empties and collapse repeats while keeping first positions."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list")

    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f"{field_name} must contain strings")
        name = _check_length(item.strip(), field_name, max_len)
        if name and name not in out:
            out.append(name)
    return out


def id_list(value: Any, field_name: str) -> List[int]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list")
    return unique_ids(optional_id(v, field_name) for v in value)


def unique_ids(values: Iterable[Optional[int]]) -> List[int]:
    out: list[int] = []
    for v in values:
        if v is not None and v not in out:
            out.append(v)
    return out
