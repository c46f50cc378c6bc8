"""Domain layer for shopkeep application."""

from shopkeep.domain.store import EntityStore
from shopkeep.domain.product import ProductService
from shopkeep.domain.sale import SaleService
from shopkeep.domain.inventory import InventoryService
from shopkeep.domain.customer import CustomerService
from shopkeep.domain.expense import ExpenseService
from shopkeep.domain.reports import ReportService

__all__ = [
    "EntityStore",
    "ProductService",
    "SaleService",
    "InventoryService",
    "CustomerService",
    "ExpenseService",
    "ReportService",
]
