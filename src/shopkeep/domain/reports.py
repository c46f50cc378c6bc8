"""Dashboard and report aggregation.

Every figure here is derived on demand from the current collections; nothing
is cached or persisted. The module-level functions are pure and take the
collections explicitly, ReportService applies them to an entity store.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from shopkeep.domain.entities import (
    Customer,
    CustomerStats,
    DailyTotals,
    DashboardStats,
    Expense,
    PaymentMethod,
    Product,
    ReportData,
    ReportPeriod,
    Sale,
    TopProduct,
)
from shopkeep.domain.store import EntityStore

LOW_STOCK_THRESHOLD = 5
TOP_PRODUCTS_LIMIT = 5


def _total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, Decimal("0"))


def stock_alerts(products: Iterable[Product]) -> tuple[tuple[Product, ...], tuple[Product, ...]]:
    """Split products into (low stock, out of stock).

    Low stock means 1..LOW_STOCK_THRESHOLD units left; a product with no
    stock is only reported as out of stock.
    """
    products = tuple(products)
    low = tuple(p for p in products if 0 < p.stock <= LOW_STOCK_THRESHOLD)
    out = tuple(p for p in products if p.stock == 0)
    return low, out


def _product_sales(
    products: Iterable[Product], sales: Iterable[Sale]
) -> list[TopProduct]:
    """Quantity and revenue per product, in order of first appearance.

    Products that no longer exist are left out.
    """
    quantities: dict[str, int] = {}
    revenue: dict[str, Decimal] = {}
    for sale in sales:
        for item in sale.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity
            revenue[item.product_id] = revenue.get(item.product_id, Decimal("0")) + item.total

    by_id = {p.id: p for p in products}
    return [
        TopProduct(product=by_id[product_id], quantity=quantity, revenue=revenue[product_id])
        for product_id, quantity in quantities.items()
        if product_id in by_id
    ]


def top_selling_products(
    products: Iterable[Product], sales: Iterable[Sale], limit: int = TOP_PRODUCTS_LIMIT
) -> tuple[TopProduct, ...]:
    """Best sellers by quantity. Ties keep first-sold order."""
    ranked = sorted(_product_sales(products, sales), key=lambda e: e.quantity, reverse=True)
    return tuple(ranked[:limit])


def top_products_by_revenue(
    products: Iterable[Product], sales: Iterable[Sale], limit: int = TOP_PRODUCTS_LIMIT
) -> tuple[TopProduct, ...]:
    """Best sellers by revenue. Ties keep first-sold order."""
    ranked = sorted(_product_sales(products, sales), key=lambda e: e.revenue, reverse=True)
    return tuple(ranked[:limit])


def dashboard_stats(
    products: Sequence[Product],
    sales: Sequence[Sale],
    expenses: Sequence[Expense],
    today: Optional[date] = None,
) -> DashboardStats:
    """Compute dashboard figures.

    Args:
        products: Current products
        sales: All recorded sales
        expenses: All recorded expenses
        today: Calendar day counted as today (defaults to the local date)

    Returns:
        DashboardStats
    """
    today = today or date.today()
    total_revenue = _total(s.total for s in sales)
    total_expenses = _total(e.amount for e in expenses)
    low, out = stock_alerts(products)

    return DashboardStats(
        todays_sales=_total(s.total for s in sales if s.date.date() == today),
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=total_revenue - total_expenses,
        low_stock_products=low,
        out_of_stock_products=out,
        top_selling_products=top_selling_products(products, sales),
    )


def report_window(
    period: ReportPeriod | str, now: Optional[datetime] = None
) -> tuple[datetime, datetime]:
    """Return the (start, end) datetimes covered by a report period.

    daily: midnight today to now; weekly: the last 7 days; monthly: the
    last calendar month.
    """
    period = ReportPeriod(period)
    now = now or datetime.now()
    if period == ReportPeriod.DAILY:
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    elif period == ReportPeriod.WEEKLY:
        start = now - timedelta(days=7)
    else:
        start = now - relativedelta(months=1)
    return start, now


def payment_breakdown(sales: Iterable[Sale]) -> dict[PaymentMethod, Decimal]:
    """Revenue per payment method, leaving out methods with no revenue."""
    sales = tuple(sales)
    breakdown = {}
    for method in PaymentMethod:
        amount = _total(s.total for s in sales if s.payment_method == method)
        if amount > 0:
            breakdown[method] = amount
    return breakdown


def period_report(
    period: ReportPeriod | str,
    products: Sequence[Product],
    sales: Sequence[Sale],
    expenses: Sequence[Expense],
    now: Optional[datetime] = None,
) -> ReportData:
    """Build a report for sales and expenses dated within a period window."""
    period = ReportPeriod(period)
    start, end = report_window(period, now)
    window_sales = tuple(s for s in sales if start <= s.date <= end)
    window_expenses = tuple(e for e in expenses if start <= e.date <= end)
    revenue = _total(s.total for s in window_sales)
    spent = _total(e.amount for e in window_expenses)

    return ReportData(
        period=period,
        start_date=start,
        end_date=end,
        sales=window_sales,
        expenses=window_expenses,
        total_revenue=revenue,
        total_expenses=spent,
        net_profit=revenue - spent,
        top_products=top_products_by_revenue(products, window_sales),
        payment_breakdown=payment_breakdown(window_sales),
    )


def daily_totals(
    sales: Sequence[Sale],
    expenses: Sequence[Expense],
    days: int = 7,
    today: Optional[date] = None,
) -> list[DailyTotals]:
    """Sales and expense totals for each of the last ``days`` days, oldest first."""
    today = today or date.today()
    totals = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        totals.append(
            DailyTotals(
                day=day,
                sales=_total(s.total for s in sales if s.date.date() == day),
                expenses=_total(e.amount for e in expenses if e.date.date() == day),
            )
        )
    return totals


def customer_stats(customer_id: str, sales: Iterable[Sale]) -> CustomerStats:
    """Lifetime spend, order count and last purchase date for a customer."""
    orders = [s for s in sales if s.customer_id == customer_id]
    return CustomerStats(
        customer_id=customer_id,
        total_spent=_total(s.total for s in orders),
        order_count=len(orders),
        last_purchase_date=max((s.date for s in orders), default=None),
    )


def active_customers(
    customers: Iterable[Customer], now: Optional[datetime] = None
) -> list[Customer]:
    """Customers who bought something within the last month."""
    since = (now or datetime.now()) - relativedelta(months=1)
    return [
        c for c in customers if c.last_purchase_date is not None and c.last_purchase_date > since
    ]


class ReportService:
    """Service exposing the aggregations over an entity store."""

    def __init__(self, store: EntityStore):
        """Initialize report service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def dashboard(self, today: Optional[date] = None) -> DashboardStats:
        """Compute dashboard figures from the current collections."""
        return dashboard_stats(self.store.products, self.store.sales, self.store.expenses, today)

    def report(self, period: ReportPeriod | str, now: Optional[datetime] = None) -> ReportData:
        """Build a daily, weekly or monthly report."""
        return period_report(
            period, self.store.products, self.store.sales, self.store.expenses, now
        )

    def daily_totals(self, days: int = 7, today: Optional[date] = None) -> list[DailyTotals]:
        """Per-day totals for the last ``days`` days."""
        return daily_totals(self.store.sales, self.store.expenses, days, today)

    def customer_stats(self, customer_id: str) -> CustomerStats:
        """Lifetime figures for one customer."""
        return customer_stats(customer_id, self.store.sales)

    def active_customers(self, now: Optional[datetime] = None) -> list[Customer]:
        """Customers with a purchase in the last month."""
        return active_customers(self.store.customers, now)
