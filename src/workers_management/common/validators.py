from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative_amount(value: Optional[Decimal], field_name: str) -> Decimal:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    amount = Decimal(value)
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount
