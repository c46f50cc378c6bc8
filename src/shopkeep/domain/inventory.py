"""Inventory domain service."""

import logging
from datetime import datetime
from typing import Optional

from shopkeep.database.base import StorageKey
from shopkeep.domain.entities import InventoryTransaction, Product, TransactionType
from shopkeep.domain.errors import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
    insufficient_stock,
    product_not_found,
)
from shopkeep.domain.reports import stock_alerts
from shopkeep.domain.store import EntityStore
from shopkeep.domain.validation import require_quantity

logger = logging.getLogger(__name__)


class InventoryService:
    """Service for the stock ledger: stock-in and stock-out transactions."""

    def __init__(self, store: EntityStore):
        """Initialize inventory service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def record_transaction(
        self,
        product_id: str,
        type: TransactionType | str,
        quantity: int,
        date: Optional[datetime] = None,
        supplier: Optional[str] = None,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> InventoryTransaction:
        """Record a stock movement and adjust the product's stock.

        The transaction and the adjusted product are saved together.

        Args:
            product_id: Product being moved
            type: "in" adds stock, "out" removes it
            quantity: Number of units, greater than zero
            date: Transaction date (defaults to now)
            supplier: Optional supplier, for stock-in
            reason: Optional reason, for stock-out
            notes: Optional notes

        Returns:
            The recorded transaction

        Raises:
            ValidationError: If type or quantity is invalid
            NotFoundError: If the product does not exist
            InsufficientStockError: If a stock-out exceeds current stock
            PersistenceError: If saving fails
        """
        try:
            type = TransactionType(type)
        except ValueError:
            raise ValidationError(f"Unknown transaction type '{type}'. Use 'in' or 'out'")
        require_quantity(quantity)

        product = self.store.get(StorageKey.PRODUCTS, product_id)
        if product is None:
            raise NotFoundError(product_not_found(product_id))

        if type == TransactionType.OUT:
            if product.stock < quantity:
                raise InsufficientStockError(insufficient_stock(product.name, product.stock, quantity))
            new_stock = product.stock - quantity
        else:
            new_stock = product.stock + quantity

        transaction = InventoryTransaction(
            id=self.store.new_id(),
            product_id=product_id,
            type=type,
            quantity=quantity,
            date=date or datetime.now(),
            supplier=supplier,
            reason=reason,
            notes=notes,
        )
        _, products = self.store.replaced(StorageKey.PRODUCTS, product_id, stock=new_stock)
        self.store.commit(
            {
                StorageKey.INVENTORY_TRANSACTIONS: self.store.inventory_transactions + (transaction,),
                StorageKey.PRODUCTS: products,
            }
        )
        logger.info(
            "Stock %s for %s: %d (now %d)", type.value, product.name, quantity, new_stock
        )
        return transaction

    def list_transactions(self, product_id: Optional[str] = None) -> list[InventoryTransaction]:
        """List inventory transactions newest first, optionally for one product."""
        transactions = self.store.inventory_transactions
        if product_id is not None:
            transactions = tuple(t for t in transactions if t.product_id == product_id)
        return sorted(transactions, key=lambda t: t.date, reverse=True)

    def ledger_movement(self, product_id: str) -> int:
        """Net stock change for a product recorded in the ledger.

        Stock-in minus stock-out minus quantities sold. A product's stock is
        its initial stock plus this value.
        """
        movement = 0
        for transaction in self.store.inventory_transactions:
            if transaction.product_id != product_id:
                continue
            if transaction.type == TransactionType.IN:
                movement += transaction.quantity
            else:
                movement -= transaction.quantity

        for sale in self.store.sales:
            for item in sale.items:
                if item.product_id == product_id:
                    movement -= item.quantity
        return movement

    def stock_alerts(self) -> tuple[tuple[Product, ...], tuple[Product, ...]]:
        """Return (low stock, out of stock) products."""
        return stock_alerts(self.store.products)
