"""Amount and quantity parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "GH₵123.45", "₦123.45"
    - "1,234.56"

    Negative amounts are rejected: prices, expenses and purchase totals are
    never below zero.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥₦₵]|GH|KES|KSh", "", amount_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: '{amount_str}'")
    return amount


def parse_quantity(quantity_str: str) -> int:
    """Parse a positive whole-number quantity.

    Raises:
        ValueError: If the string is not a whole number greater than zero
    """
    text = quantity_str.strip() if quantity_str else ""
    if not re.fullmatch(r"\+?\d+", text):
        raise ValueError(f"Please enter a valid quantity, got '{quantity_str}'")
    quantity = int(text)
    if quantity <= 0:
        raise ValueError(f"Quantity must be greater than zero, got '{quantity_str}'")
    return quantity
