"""Tests for dashboard and report aggregation."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from shopkeep.domain.entities import (
    Customer,
    Expense,
    ExpenseCategory,
    PaymentMethod,
    Product,
    ProductCategory,
    ReportPeriod,
    Sale,
    SaleItem,
    SaleLine,
)
from shopkeep.domain.reports import (
    active_customers,
    customer_stats,
    daily_totals,
    dashboard_stats,
    payment_breakdown,
    period_report,
    report_window,
    stock_alerts,
    top_selling_products,
)

NOW = datetime(2024, 3, 31, 14, 0)
TODAY = NOW.date()


def _product(product_id, stock=10, price="5.00", name=None):
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        category=ProductCategory.OTHER_GROCERIES,
        price=Decimal(price),
        stock=stock,
        created_at=NOW,
        updated_at=NOW,
    )


def _sale(sale_id, when, *lines, payment=PaymentMethod.CASH, customer_id=None):
    """lines are (product_id, quantity, unit_price) tuples."""
    items = tuple(
        SaleItem(
            product_id=pid,
            product_name=f"Product {pid}",
            quantity=qty,
            price=Decimal(price),
            total=Decimal(price) * qty,
        )
        for pid, qty, price in lines
    )
    return Sale(
        id=sale_id,
        items=items,
        total=sum((i.total for i in items), Decimal("0")),
        payment_method=payment,
        date=when,
        customer_id=customer_id,
    )


def _expense(expense_id, when, amount):
    return Expense(
        id=expense_id,
        category=ExpenseCategory.OTHER,
        amount=Decimal(amount),
        description="Misc",
        date=when,
    )


def test_dashboard_totals():
    products = [_product("a"), _product("b")]
    sales = [
        _sale("s1", NOW - timedelta(days=3), ("a", 2, "5.00")),
        _sale("s2", NOW, ("b", 1, "3.50")),
    ]
    expenses = [_expense("e1", NOW, "4.00"), _expense("e2", NOW - timedelta(days=10), "1.25")]

    stats = dashboard_stats(products, sales, expenses, today=TODAY)

    assert stats.total_revenue == Decimal("13.50")
    assert stats.total_expenses == Decimal("5.25")
    assert stats.net_profit == Decimal("8.25")
    assert stats.todays_sales == Decimal("3.50")


def test_todays_sales_compares_calendar_day_only():
    midnight = datetime.combine(TODAY, datetime.min.time())
    sales = [
        _sale("today-start", midnight, ("a", 1, "1.00")),
        _sale("today-end", midnight + timedelta(hours=23, minutes=59), ("a", 1, "2.00")),
        _sale("yesterday", midnight - timedelta(seconds=1), ("a", 1, "4.00")),
        _sale("tomorrow", midnight + timedelta(days=1), ("a", 1, "8.00")),
    ]

    stats = dashboard_stats([_product("a")], sales, [], today=TODAY)

    assert stats.todays_sales == Decimal("3.00")


def test_total_revenue_is_independent_of_order():
    sales = [_sale(f"s{i}", NOW - timedelta(days=i), ("a", i + 1, "1.10")) for i in range(6)]

    forward = dashboard_stats([], sales, [], today=TODAY)
    backward = dashboard_stats([], list(reversed(sales)), [], today=TODAY)

    assert forward.total_revenue == backward.total_revenue == sum(s.total for s in sales)


def test_low_stock_threshold_boundary():
    five, six, zero, one = _product("5", 5), _product("6", 6), _product("0", 0), _product("1", 1)

    low, out = stock_alerts([five, six, zero, one])

    assert low == (five, one)
    assert out == (zero,)


def test_top_selling_by_quantity():
    products = [_product(pid) for pid in "abcdefg"]
    sales = [
        _sale("s1", NOW, ("a", 1, "1"), ("b", 5, "1")),
        _sale("s2", NOW, ("c", 3, "1"), ("a", 1, "1"), ("d", 4, "1")),
        _sale("s3", NOW, ("e", 2, "1"), ("f", 1, "1"), ("g", 6, "1")),
    ]

    top = top_selling_products(products, sales)

    assert [(t.product.id, t.quantity) for t in top] == [
        ("g", 6),
        ("b", 5),
        ("d", 4),
        ("c", 3),
        ("a", 2),
    ]


def test_top_selling_ties_keep_first_sold_order():
    products = [_product("x"), _product("y"), _product("z")]
    sales = [_sale("s1", NOW, ("y", 2, "1"), ("x", 2, "1")), _sale("s2", NOW, ("z", 2, "1"))]

    top = top_selling_products(products, sales)

    assert [t.product.id for t in top] == ["y", "x", "z"]


def test_top_selling_skips_deleted_products():
    sales = [_sale("s1", NOW, ("gone", 50, "1"), ("a", 1, "1"))]

    stats = dashboard_stats([_product("a")], sales, [], today=TODAY)

    assert [t.product.id for t in stats.top_selling_products] == ["a"]
    assert stats.total_revenue == Decimal("51")


def test_aggregation_is_idempotent():
    products = [_product("a", 3), _product("b", 0)]
    sales = [_sale("s1", NOW, ("a", 2, "2.00"), ("b", 1, "9.00"))]
    expenses = [_expense("e1", NOW, "1.00")]

    assert dashboard_stats(products, sales, expenses, TODAY) == dashboard_stats(
        products, sales, expenses, TODAY
    )
    assert period_report("weekly", products, sales, expenses, NOW) == period_report(
        "weekly", products, sales, expenses, NOW
    )


@pytest.mark.parametrize(
    "period,expected_start",
    [
        (ReportPeriod.DAILY, datetime(2024, 3, 31, 0, 0)),
        (ReportPeriod.WEEKLY, datetime(2024, 3, 24, 14, 0)),
        (ReportPeriod.MONTHLY, datetime(2024, 2, 29, 14, 0)),
    ],
)
def test_report_window(period, expected_start):
    assert report_window(period, NOW) == (expected_start, NOW)


def test_period_report_filters_window_and_ranks_by_revenue():
    products = [_product("cheap"), _product("dear")]
    sales = [
        _sale("in1", NOW - timedelta(days=2), ("cheap", 10, "1.00"), payment=PaymentMethod.CASH),
        _sale("in2", NOW - timedelta(days=6), ("dear", 1, "25.00"), payment=PaymentMethod.BANK),
        _sale("out", NOW - timedelta(days=8), ("dear", 5, "25.00")),
        _sale("future", NOW + timedelta(minutes=1), ("cheap", 1, "1.00")),
    ]
    expenses = [
        _expense("e-in", NOW - timedelta(days=1), "7.00"),
        _expense("e-out", NOW - timedelta(days=30), "100.00"),
    ]

    report = period_report(ReportPeriod.WEEKLY, products, sales, expenses, now=NOW)

    assert [s.id for s in report.sales] == ["in1", "in2"]
    assert [e.id for e in report.expenses] == ["e-in"]
    assert report.total_revenue == Decimal("35.00")
    assert report.total_expenses == Decimal("7.00")
    assert report.net_profit == Decimal("28.00")
    assert [(t.product.id, t.quantity, t.revenue) for t in report.top_products] == [
        ("dear", 1, Decimal("25.00")),
        ("cheap", 10, Decimal("10.00")),
    ]
    assert report.payment_breakdown == {
        PaymentMethod.CASH: Decimal("10.00"),
        PaymentMethod.BANK: Decimal("25.00"),
    }


def test_daily_report_starts_at_midnight():
    sales = [
        _sale("early", datetime(2024, 3, 31, 0, 0), ("a", 1, "1")),
        _sale("late-yesterday", datetime(2024, 3, 30, 23, 59), ("a", 1, "1")),
    ]

    report = period_report("daily", [_product("a")], sales, [], now=NOW)

    assert [s.id for s in report.sales] == ["early"]


def test_payment_breakdown_omits_unused_methods():
    sales = [_sale("s", NOW, ("a", 1, "2"), payment=PaymentMethod.MOBILE_MONEY)]
    assert payment_breakdown(sales) == {PaymentMethod.MOBILE_MONEY: Decimal("2")}
    assert payment_breakdown([]) == {}


def test_daily_totals_oldest_first():
    sales = [_sale("s1", NOW, ("a", 1, "3")), _sale("s2", NOW - timedelta(days=2), ("a", 1, "4"))]
    expenses = [_expense("e1", NOW - timedelta(days=6), "1.50")]

    totals = daily_totals(sales, expenses, days=7, today=TODAY)

    assert [t.day for t in totals] == [TODAY - timedelta(days=i) for i in range(6, -1, -1)]
    assert totals[-1].sales == Decimal("3")
    assert totals[-3].sales == Decimal("4")
    assert totals[0].expenses == Decimal("1.50")
    assert totals[1].sales == Decimal("0")


def test_customer_stats():
    sales = [
        _sale("s1", datetime(2024, 3, 1, 10), ("a", 1, "5"), customer_id="c1"),
        _sale("s2", datetime(2024, 3, 20, 10), ("a", 3, "5"), customer_id="c1"),
        _sale("s3", datetime(2024, 3, 25, 10), ("a", 1, "5"), customer_id="c2"),
        _sale("s4", datetime(2024, 3, 26, 10), ("a", 1, "5")),
    ]

    stats = customer_stats("c1", sales)

    assert stats.total_spent == Decimal("20")
    assert stats.order_count == 2
    assert stats.last_purchase_date == datetime(2024, 3, 20, 10)


def test_customer_stats_without_orders():
    stats = customer_stats("c9", [])

    assert stats.total_spent == Decimal("0")
    assert stats.order_count == 0
    assert stats.last_purchase_date is None


def test_active_customers():
    def customer(cid, last):
        return Customer(
            id=cid,
            name=cid,
            total_purchases=Decimal("1"),
            created_at=NOW,
            last_purchase_date=last,
        )

    recent = customer("recent", NOW - timedelta(days=3))
    stale = customer("stale", NOW - timedelta(days=40))
    never = customer("never", None)

    assert active_customers([recent, stale, never], now=NOW) == [recent]


def test_report_service_uses_store(report_service, sale_service, sample_product):
    sale_service.record_sale([SaleLine(sample_product.id, 2)], "cash")

    assert report_service.dashboard().todays_sales == Decimal("10.00")
    assert report_service.report("daily").total_revenue == Decimal("10.00")
    assert len(report_service.daily_totals()) == 7
