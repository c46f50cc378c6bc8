"""Mapper functions to convert between domain entities and stored records.

Records are plain JSON-serializable dicts using the camelCase field names of
the on-device format. Dates are written as ISO-8601 strings and re-parsed on
load; currency amounts are written as decimal strings so no precision is lost.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from dateutil.parser import isoparse

from shopkeep.database.base import Record, StorageKey
from shopkeep.domain import entities as domain


def _dump_date(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _load_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid stored date {value!r}")
    parsed = isoparse(value)
    if parsed.tzinfo is not None:
        # Offset-aware strings (e.g. trailing "Z") are shifted to local wall time
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _load_required_date(value: Optional[str]) -> datetime:
    parsed = _load_date(value)
    if parsed is None:
        raise ValueError("Missing required date")
    return parsed


def _dump_amount(value: Decimal) -> str:
    return str(value)


def _load_amount(value: Any) -> Decimal:
    # Older payloads stored plain JSON numbers
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid stored amount {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid stored amount {value!r}")
    return amount


def product_to_record(product: domain.Product) -> Record:
    """Convert domain Product to a stored record."""
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category.value,
        "price": _dump_amount(product.price),
        "stock": product.stock,
        "description": product.description,
        "image": product.image,
        "createdAt": _dump_date(product.created_at),
        "updatedAt": _dump_date(product.updated_at),
    }


def product_from_record(record: Record) -> domain.Product:
    """Convert a stored record to domain Product."""
    return domain.Product(
        id=record["id"],
        name=record["name"],
        category=domain.ProductCategory(record["category"]),
        price=_load_amount(record["price"]),
        stock=int(record["stock"]),
        description=record.get("description"),
        image=record.get("image"),
        created_at=_load_required_date(record["createdAt"]),
        updated_at=_load_required_date(record["updatedAt"]),
    )


def sale_item_to_record(item: domain.SaleItem) -> Record:
    """Convert domain SaleItem to a stored record."""
    return {
        "productId": item.product_id,
        "productName": item.product_name,
        "quantity": item.quantity,
        "price": _dump_amount(item.price),
        "total": _dump_amount(item.total),
    }


def sale_item_from_record(record: Record) -> domain.SaleItem:
    """Convert a stored record to domain SaleItem."""
    return domain.SaleItem(
        product_id=record["productId"],
        product_name=record["productName"],
        quantity=int(record["quantity"]),
        price=_load_amount(record["price"]),
        total=_load_amount(record["total"]),
    )


def sale_to_record(sale: domain.Sale) -> Record:
    """Convert domain Sale to a stored record."""
    return {
        "id": sale.id,
        "items": [sale_item_to_record(item) for item in sale.items],
        "total": _dump_amount(sale.total),
        "paymentMethod": sale.payment_method.value,
        "date": _dump_date(sale.date),
        "customerId": sale.customer_id,
        "notes": sale.notes,
    }


def sale_from_record(record: Record) -> domain.Sale:
    """Convert a stored record to domain Sale."""
    return domain.Sale(
        id=record["id"],
        items=tuple(sale_item_from_record(item) for item in record["items"]),
        total=_load_amount(record["total"]),
        payment_method=domain.PaymentMethod(record["paymentMethod"]),
        date=_load_required_date(record["date"]),
        customer_id=record.get("customerId"),
        notes=record.get("notes"),
    )


def expense_to_record(expense: domain.Expense) -> Record:
    """Convert domain Expense to a stored record."""
    return {
        "id": expense.id,
        "category": expense.category.value,
        "amount": _dump_amount(expense.amount),
        "description": expense.description,
        "date": _dump_date(expense.date),
        "notes": expense.notes,
    }


def expense_from_record(record: Record) -> domain.Expense:
    """Convert a stored record to domain Expense."""
    return domain.Expense(
        id=record["id"],
        category=domain.ExpenseCategory(record["category"]),
        amount=_load_amount(record["amount"]),
        description=record["description"],
        date=_load_required_date(record["date"]),
        notes=record.get("notes"),
    )


def customer_to_record(customer: domain.Customer) -> Record:
    """Convert domain Customer to a stored record."""
    return {
        "id": customer.id,
        "name": customer.name,
        "phoneNumber": customer.phone_number,
        "email": customer.email,
        "address": customer.address,
        "totalPurchases": _dump_amount(customer.total_purchases),
        "lastPurchaseDate": _dump_date(customer.last_purchase_date),
        "createdAt": _dump_date(customer.created_at),
    }


def customer_from_record(record: Record) -> domain.Customer:
    """Convert a stored record to domain Customer."""
    return domain.Customer(
        id=record["id"],
        name=record["name"],
        phone_number=record.get("phoneNumber"),
        email=record.get("email"),
        address=record.get("address"),
        total_purchases=_load_amount(record.get("totalPurchases", 0)),
        last_purchase_date=_load_date(record.get("lastPurchaseDate")),
        created_at=_load_required_date(record["createdAt"]),
    )


def transaction_to_record(transaction: domain.InventoryTransaction) -> Record:
    """Convert domain InventoryTransaction to a stored record."""
    return {
        "id": transaction.id,
        "productId": transaction.product_id,
        "type": transaction.type.value,
        "quantity": transaction.quantity,
        "date": _dump_date(transaction.date),
        "supplier": transaction.supplier,
        "reason": transaction.reason,
        "notes": transaction.notes,
    }


def transaction_from_record(record: Record) -> domain.InventoryTransaction:
    """Convert a stored record to domain InventoryTransaction."""
    return domain.InventoryTransaction(
        id=record["id"],
        product_id=record["productId"],
        type=domain.TransactionType(record["type"]),
        quantity=int(record["quantity"]),
        date=_load_required_date(record["date"]),
        supplier=record.get("supplier"),
        reason=record.get("reason"),
        notes=record.get("notes"),
    )


TO_RECORD: dict[StorageKey, Callable[[Any], Record]] = {
    StorageKey.PRODUCTS: product_to_record,
    StorageKey.SALES: sale_to_record,
    StorageKey.EXPENSES: expense_to_record,
    StorageKey.CUSTOMERS: customer_to_record,
    StorageKey.INVENTORY_TRANSACTIONS: transaction_to_record,
}

FROM_RECORD: dict[StorageKey, Callable[[Record], Any]] = {
    StorageKey.PRODUCTS: product_from_record,
    StorageKey.SALES: sale_from_record,
    StorageKey.EXPENSES: expense_from_record,
    StorageKey.CUSTOMERS: customer_from_record,
    StorageKey.INVENTORY_TRANSACTIONS: transaction_from_record,
}
