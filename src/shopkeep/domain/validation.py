"""Input checks shared by the domain services."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from shopkeep.domain.errors import ValidationError, invalid_quantity


def require_quantity(quantity: Any) -> int:
    """Return quantity if it is a positive int, else raise ValidationError."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(invalid_quantity(quantity))
    return quantity


def require_stock(stock: Any) -> int:
    """Return stock if it is an int >= 0."""
    if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
        raise ValidationError(f"Stock must be a whole number of zero or more, got {stock!r}")
    return stock


def require_amount(amount: Any, field: str = "Amount") -> Decimal:
    """Coerce amount to a finite, non-negative Decimal."""
    if isinstance(amount, bool):
        raise ValidationError(f"{field} must be a number, got {amount!r}")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number, got {amount!r}")
    if not value.is_finite():
        raise ValidationError(f"{field} must be a finite number, got {amount!r}")
    if value < 0:
        raise ValidationError(f"{field} cannot be negative, got {amount}")
    return value


def require_text(value: Optional[str], field: str) -> str:
    """Return stripped text, raising if it is missing or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"Please enter {field}")
    return str(value).strip()
