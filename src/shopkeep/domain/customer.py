"""Customer domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from shopkeep.database.base import StorageKey
from shopkeep.domain.entities import Customer
from shopkeep.domain.errors import ValidationError
from shopkeep.domain.store import EntityStore
from shopkeep.domain.validation import require_amount, require_text


class CustomerService:
    """Service for managing the customer roster."""

    def __init__(self, store: EntityStore):
        """Initialize customer service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def create_customer(
        self,
        name: str,
        phone_number: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
    ) -> Customer:
        """Create a customer with no purchases yet.

        Raises:
            ValidationError: If name is blank
        """
        customer = Customer(
            id=self.store.new_id(),
            name=require_text(name, "customer name"),
            phone_number=phone_number or None,
            email=email or None,
            address=address or None,
            total_purchases=Decimal("0"),
            created_at=datetime.now(),
        )
        return self.store.create(StorageKey.CUSTOMERS, customer)

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        """Get customer by ID, or None if not found."""
        return self.store.get(StorageKey.CUSTOMERS, customer_id)

    def list_customers(self, search: Optional[str] = None) -> list[Customer]:
        """List customers matching a name, phone number or email fragment."""
        customers = list(self.store.customers)
        if not search:
            return customers

        needle = search.lower()
        return [
            c
            for c in customers
            if needle in c.name.lower()
            or (c.phone_number is not None and search in c.phone_number)
            or (c.email is not None and needle in c.email.lower())
        ]

    def update_customer(self, customer_id: str, **changes: Any) -> Customer:
        """Apply a partial update to a customer.

        total_purchases is a running sum: it can only grow.

        Raises:
            NotFoundError: If the customer does not exist
            ValidationError: If a changed field is invalid
        """
        current = self.store.require(StorageKey.CUSTOMERS, customer_id)
        if "name" in changes:
            changes["name"] = require_text(changes["name"], "customer name")
        if "total_purchases" in changes:
            total = require_amount(changes["total_purchases"], "Total purchases")
            if total < current.total_purchases:
                raise ValidationError("Total purchases cannot decrease")
            changes["total_purchases"] = total
        if "created_at" in changes:
            raise ValidationError("created_at is managed automatically")

        return self.store.update(StorageKey.CUSTOMERS, customer_id, **changes)
