"""Domain model entities for shopkeep.

These are pure data classes representing business concepts, independent of
how they are persisted. Collections of them are held by the entity store as
tuples and replaced wholesale on every mutation.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ProductCategory(str, Enum):
    """Product catalog categories."""

    FRESH_FISH = "freshFish"
    FROZEN_FISH = "frozenFish"
    DRINKS = "drinks"
    SPICES = "spices"
    OTHER_GROCERIES = "otherGroceries"


class PaymentMethod(str, Enum):
    """Accepted payment methods for a sale."""

    CASH = "cash"
    MOBILE_MONEY = "mobileMoney"
    BANK = "bank"


class ExpenseCategory(str, Enum):
    """Expense categories."""

    TRANSPORT = "transport"
    ICE = "ice"
    RENT = "rent"
    UTILITIES = "utilities"
    OTHER = "other"


class TransactionType(str, Enum):
    """Direction of an inventory transaction."""

    IN = "in"
    OUT = "out"


class ReportPeriod(str, Enum):
    """Report windows."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class Product:
    """Catalog product with its current stock count."""

    id: str
    name: str
    category: ProductCategory
    price: Decimal
    stock: int
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class InventoryTransaction:
    """Stock movement. Append-only, never edited after creation."""

    id: str
    product_id: str
    type: TransactionType
    quantity: int
    date: datetime
    supplier: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class SaleItem:
    """Line of a sale, with product name and unit price captured at sale time."""

    product_id: str
    product_name: str
    quantity: int
    price: Decimal
    total: Decimal


@dataclass(frozen=True)
class SaleLine:
    """Requested line for a new sale: which product and how many."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class Sale:
    """Recorded sale."""

    id: str
    items: tuple[SaleItem, ...]
    total: Decimal
    payment_method: PaymentMethod
    date: datetime
    customer_id: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    """Recorded business expense."""

    id: str
    category: ExpenseCategory
    amount: Decimal
    description: str
    date: datetime
    notes: Optional[str] = None


@dataclass(frozen=True)
class Customer:
    """Customer with a running total of purchases."""

    id: str
    name: str
    total_purchases: Decimal
    created_at: datetime
    phone_number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    last_purchase_date: Optional[datetime] = None


@dataclass(frozen=True)
class TopProduct:
    """Product ranking entry used by dashboard and reports."""

    product: Product
    quantity: int
    revenue: Decimal = Decimal("0")


@dataclass(frozen=True)
class DashboardStats:
    """Dashboard figures derived from the current collections."""

    todays_sales: Decimal
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    low_stock_products: tuple[Product, ...]
    out_of_stock_products: tuple[Product, ...]
    top_selling_products: tuple[TopProduct, ...]


@dataclass(frozen=True)
class ReportData:
    """Period report over a filtered window of sales and expenses."""

    period: ReportPeriod
    start_date: datetime
    end_date: datetime
    sales: tuple[Sale, ...]
    expenses: tuple[Expense, ...]
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    top_products: tuple[TopProduct, ...]
    payment_breakdown: dict[PaymentMethod, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class CustomerStats:
    """Lifetime figures for one customer, derived from sales."""

    customer_id: str
    total_spent: Decimal
    order_count: int
    last_purchase_date: Optional[datetime]


@dataclass(frozen=True)
class DailyTotals:
    """Sales and expense totals for one calendar day."""

    day: date
    sales: Decimal
    expenses: Decimal
