from __future__ import annotations

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def optional_float(value: Any, field_name: str) -> Optional[float]:
    """Parse a JSON number or numeric string; None/"" mean absent.

    Only finiteness is checked, not geographic range.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(parsed):
        raise ValidationError(f"{field_name} must be a finite number")
    return parsed


def require_amount(value: Any, field_name: str, *, allow_zero: bool = True) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite() or amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"{field_name} must be a positive amount")
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def require_date(value: Any, field_name: str) -> date:
    """Accept YYYY-MM-DD or a full ISO timestamp."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    v = value.strip()
    try:
        if len(v) == 10:
            return datetime.strptime(v, "%Y-%m-%d").date()
        return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date (YYYY-MM-DD)")


def require_enum(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
