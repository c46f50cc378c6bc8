"""Expense domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from shopkeep.database.base import StorageKey
from shopkeep.domain.entities import Expense, ExpenseCategory
from shopkeep.domain.errors import ValidationError
from shopkeep.domain.store import EntityStore
from shopkeep.domain.validation import require_amount, require_text


class ExpenseService:
    """Service for recording expenses. Expenses are write-once."""

    def __init__(self, store: EntityStore):
        self.store = store

    def record_expense(
        self,
        category: ExpenseCategory | str,
        amount: Decimal | int | str,
        description: str,
        date: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> Expense:
        """Record an expense.

        Args:
            category: Expense category
            amount: Amount spent, zero or more
            description: What the money was spent on
            date: When it was spent (defaults to now)
            notes: Optional notes

        Returns:
            The recorded expense

        Raises:
            ValidationError: If any field is invalid
        """
        try:
            category = ExpenseCategory(category)
        except ValueError:
            raise ValidationError(f"Unknown expense category '{category}'")

        expense = Expense(
            id=self.store.new_id(),
            category=category,
            amount=require_amount(amount),
            description=require_text(description, "a description"),
            date=date or datetime.now(),
            notes=notes,
        )
        return self.store.create(StorageKey.EXPENSES, expense)

    def list_expenses(self) -> list[Expense]:
        """List expenses, newest first."""
        return sorted(self.store.expenses, key=lambda e: e.date, reverse=True)
