"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the product's current stock."""


class PersistenceError(RuntimeError):
    """Storage adapter failed to save or load a collection."""


def product_not_found(product_id: str) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def entity_not_found(kind: str, entity_id: str) -> str:
    """Return message for a missing record in any collection."""
    return f"{kind} {entity_id} not found"


def insufficient_stock(product_name: str, available: int, requested: int) -> str:
    """Return message when a product cannot cover the requested quantity."""
    return (
        f"Insufficient stock for {product_name}: "
        f"{available} available, {requested} requested"
    )


def invalid_quantity(quantity: object) -> str:
    """Return message for a non-positive or non-integer quantity."""
    return f"Quantity must be a positive whole number, got {quantity!r}"
