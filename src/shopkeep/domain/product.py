"""Product domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from shopkeep.database.base import StorageKey
from shopkeep.domain.entities import Product, ProductCategory
from shopkeep.domain.errors import ValidationError
from shopkeep.domain.store import EntityStore
from shopkeep.domain.validation import require_amount, require_stock, require_text


def _coerce_category(category: ProductCategory | str) -> ProductCategory:
    try:
        return ProductCategory(category)
    except ValueError:
        choices = ", ".join(c.value for c in ProductCategory)
        raise ValidationError(f"Unknown product category '{category}'. Choose one of: {choices}")


class ProductService:
    """Service for managing the product catalog."""

    def __init__(self, store: EntityStore):
        """Initialize product service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def create_product(
        self,
        name: str,
        category: ProductCategory | str,
        price: Decimal | int | str,
        stock: int,
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Product:
        """Create a new product.

        Args:
            name: Product name
            category: Product category
            price: Unit price, zero or more
            stock: Initial stock, zero or more
            description: Optional description
            image: Optional image URI

        Returns:
            The created product

        Raises:
            ValidationError: If any field is invalid
        """
        now = datetime.now()
        product = Product(
            id=self.store.new_id(),
            name=require_text(name, "product name"),
            category=_coerce_category(category),
            price=require_amount(price, "Price"),
            stock=require_stock(stock),
            description=description,
            image=image,
            created_at=now,
            updated_at=now,
        )
        return self.store.create(StorageKey.PRODUCTS, product)

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID, or None if not found."""
        return self.store.get(StorageKey.PRODUCTS, product_id)

    def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[ProductCategory | str] = None,
    ) -> list[Product]:
        """List products, optionally filtered by name and category.

        Args:
            search: Case-insensitive substring of the product name
            category: Only products in this category

        Returns:
            Matching products in catalog order
        """
        products = list(self.store.products)
        if search:
            needle = search.lower()
            products = [p for p in products if needle in p.name.lower()]
        if category is not None:
            wanted = _coerce_category(category)
            products = [p for p in products if p.category == wanted]
        return products

    def update_product(self, product_id: str, **changes: Any) -> Product:
        """Apply a partial update to a product.

        Raises:
            NotFoundError: If the product does not exist
            ValidationError: If a changed field is invalid
        """
        if "name" in changes:
            changes["name"] = require_text(changes["name"], "product name")
        if "category" in changes:
            changes["category"] = _coerce_category(changes["category"])
        if "price" in changes:
            changes["price"] = require_amount(changes["price"], "Price")
        if "stock" in changes:
            changes["stock"] = require_stock(changes["stock"])
        for managed in ("created_at", "updated_at"):
            if managed in changes:
                raise ValidationError(f"{managed} is managed automatically")

        return self.store.update(StorageKey.PRODUCTS, product_id, **changes)

    def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Sales and inventory transactions that reference it are kept as they
        are; lookups of the removed id simply return nothing afterwards.
        """
        self.store.delete(StorageKey.PRODUCTS, product_id)
