from __future__ import annotations

from typing import Any, Optional

from ..core.constants import MAX_LIMIT
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return value.strip()


def require_id(value: Any, field_name: str) -> int:
    """Coerce an association id; missing, zero or non-numeric values are rejected."""

    if value is None or value == "":
        raise ValidationError(f"Vui lòng chọn {field_name}")
    try:
        v = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ")
    if v <= 0:
        raise ValidationError(f"{field_name} không hợp lệ")
    return v


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_id(value, field_name)


def coerce_point(value: Any, field_name: str) -> int:
    """Signed integer delta; absent means 0."""

    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} phải là số nguyên")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field_name} phải là số nguyên")
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} phải là số nguyên")


def require_page(skip: Any, limit: Any) -> tuple[int, int]:
    try:
        s = int(skip)
        lim = int(limit)
    except (TypeError, ValueError):
        raise ValidationError("Tham số phân trang không hợp lệ")
    if s < 0 or lim <= 0 or lim > MAX_LIMIT:
        raise ValidationError(f"Phân trang không hợp lệ (skip >= 0, 1 <= limit <= {MAX_LIMIT})")
    return s, lim
