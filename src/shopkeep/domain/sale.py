"""Sale domain service."""

import logging
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Optional, Sequence

from shopkeep.database.base import StorageKey
from shopkeep.domain.entities import PaymentMethod, Sale, SaleItem, SaleLine
from shopkeep.domain.errors import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
    insufficient_stock,
    product_not_found,
)
from shopkeep.domain.store import EntityStore
from shopkeep.domain.validation import require_quantity

logger = logging.getLogger(__name__)


class SaleService:
    """Service for recording sales and the stock and customer updates they imply."""

    def __init__(self, store: EntityStore):
        """Initialize sale service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def record_sale(
        self,
        items: Sequence[SaleLine],
        payment_method: PaymentMethod | str,
        date: Optional[datetime] = None,
        customer_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Sale:
        """Record a sale.

        Every line is checked against current stock before anything changes.
        Lines for the same product are checked against their combined
        quantity. The sale, the decremented products and the customer's
        running total are then saved together, so a storage failure leaves
        everything as it was.

        Args:
            items: Products and quantities sold
            payment_method: How the customer paid
            date: Sale date (defaults to now)
            customer_id: Optional customer to credit; ignored if unknown
            notes: Optional notes

        Returns:
            The recorded sale

        Raises:
            ValidationError: If items are empty or a quantity is invalid
            NotFoundError: If a product does not exist
            InsufficientStockError: If any product cannot cover its quantity
            PersistenceError: If saving fails
        """
        if not items:
            raise ValidationError("Please add at least one item")

        try:
            payment_method = PaymentMethod(payment_method)
        except ValueError:
            raise ValidationError(f"Unknown payment method '{payment_method}'")

        requested: dict[str, int] = {}
        for line in items:
            require_quantity(line.quantity)
            if self.store.get(StorageKey.PRODUCTS, line.product_id) is None:
                raise NotFoundError(product_not_found(line.product_id))
            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity

        for product_id, quantity in requested.items():
            product = self.store.get(StorageKey.PRODUCTS, product_id)
            if product.stock < quantity:
                raise InsufficientStockError(
                    insufficient_stock(product.name, product.stock, quantity)
                )

        sale_items = []
        for line in items:
            product = self.store.get(StorageKey.PRODUCTS, line.product_id)
            sale_items.append(
                SaleItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=line.quantity,
                    price=product.price,
                    total=product.price * line.quantity,
                )
            )

        sale = Sale(
            id=self.store.new_id(),
            items=tuple(sale_items),
            total=sum((item.total for item in sale_items), Decimal("0")),
            payment_method=payment_method,
            date=date or datetime.now(),
            customer_id=customer_id,
            notes=notes,
        )

        products = self.store.products
        for product_id, quantity in requested.items():
            product = self.store.get(StorageKey.PRODUCTS, product_id)
            _, products = self.store.replaced(
                StorageKey.PRODUCTS, product_id, base=products, stock=product.stock - quantity
            )

        changes = {
            StorageKey.SALES: self.store.sales + (sale,),
            StorageKey.PRODUCTS: products,
        }

        customer = None
        if customer_id is not None:
            customer = self.store.get(StorageKey.CUSTOMERS, customer_id)
            if customer is None:
                logger.warning("Sale %s references unknown customer %s", sale.id, customer_id)
            else:
                _, changes[StorageKey.CUSTOMERS] = self.store.replaced(
                    StorageKey.CUSTOMERS,
                    customer_id,
                    total_purchases=customer.total_purchases + sale.total,
                    last_purchase_date=sale.date,
                )

        self.store.commit(changes)
        logger.info(
            "Recorded sale %s: %d item(s), total %s, %s%s",
            sale.id,
            len(sale.items),
            sale.total,
            sale.payment_method.value,
            f", customer {customer.id}" if customer is not None else "",
        )
        return sale

    def get_sale(self, sale_id: str) -> Optional[Sale]:
        """Get sale by ID, or None if not found."""
        return self.store.get(StorageKey.SALES, sale_id)

    def list_sales(self, customer_id: Optional[str] = None) -> list[Sale]:
        """List sales newest first, optionally for one customer."""
        sales = self.store.sales
        if customer_id is not None:
            sales = tuple(s for s in sales if s.customer_id == customer_id)
        return sorted(sales, key=lambda s: s.date, reverse=True)

    def todays_sales(self, today: Optional[date_type] = None) -> list[Sale]:
        """List sales made on the given calendar day (defaults to today)."""
        today = today or date_type.today()
        return [s for s in self.store.sales if s.date.date() == today]
