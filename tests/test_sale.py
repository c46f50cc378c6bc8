"""Tests for sale recording and its stock and customer cascade."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from shopkeep.domain.entities import PaymentMethod, SaleLine
from shopkeep.domain.errors import (
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)


def _stock(product_service, product):
    return product_service.get_product(product.id).stock


def test_sale_reduces_stock_and_adds_revenue(
    sale_service, product_service, report_service, sample_product
):
    revenue_before = report_service.dashboard().total_revenue

    sale = sale_service.record_sale([SaleLine(sample_product.id, 3)], PaymentMethod.CASH)

    assert _stock(product_service, sample_product) == 7
    assert sale.total == Decimal("15.00")
    assert report_service.dashboard().total_revenue == revenue_before + Decimal("15.00")


def test_sale_exceeding_stock_is_rejected(sale_service, product_service, store, sample_product):
    sale_service.record_sale([SaleLine(sample_product.id, 3)], "cash")
    sales_before = store.sales

    with pytest.raises(InsufficientStockError):
        sale_service.record_sale([SaleLine(sample_product.id, 8)], "cash")

    assert _stock(product_service, sample_product) == 7
    assert store.sales == sales_before


def test_sale_can_empty_stock_exactly(sale_service, product_service, sample_product):
    sale_service.record_sale([SaleLine(sample_product.id, 10)], "bank")
    assert _stock(product_service, sample_product) == 0


def test_one_short_item_rejects_whole_sale(
    sale_service, product_service, store, sample_product, second_product
):
    with pytest.raises(InsufficientStockError):
        sale_service.record_sale(
            [SaleLine(sample_product.id, 2), SaleLine(second_product.id, 5)], "cash"
        )

    assert store.sales == ()
    assert _stock(product_service, sample_product) == 10
    assert _stock(product_service, second_product) == 4


def test_repeated_lines_checked_against_combined_quantity(
    sale_service, product_service, store, sample_product
):
    with pytest.raises(InsufficientStockError):
        sale_service.record_sale(
            [SaleLine(sample_product.id, 6), SaleLine(sample_product.id, 6)], "cash"
        )
    assert _stock(product_service, sample_product) == 10

    sale = sale_service.record_sale(
        [SaleLine(sample_product.id, 4), SaleLine(sample_product.id, 5)], "cash"
    )
    assert len(sale.items) == 2
    assert _stock(product_service, sample_product) == 1


def test_multi_item_sale_totals(sale_service, product_service, sample_product, second_product):
    sale = sale_service.record_sale(
        [SaleLine(sample_product.id, 2), SaleLine(second_product.id, 3)], "mobileMoney"
    )

    assert [item.total for item in sale.items] == [Decimal("10.00"), Decimal("7.50")]
    assert sale.total == Decimal("17.50")
    assert sale.payment_method == PaymentMethod.MOBILE_MONEY
    assert _stock(product_service, second_product) == 1


def test_sale_items_snapshot_name_and_price(sale_service, product_service, sample_product):
    sale = sale_service.record_sale([SaleLine(sample_product.id, 1)], "cash")
    product_service.update_product(sample_product.id, name="Tilapia (large)", price="9.99")

    item = sale_service.get_sale(sale.id).items[0]
    assert item.product_name == "Tilapia"
    assert item.price == Decimal("5.00")


@pytest.mark.parametrize("quantities", [[], [0], [-2], [1.5]])
def test_invalid_sale_input(sale_service, store, sample_product, quantities):
    lines = [SaleLine(sample_product.id, quantity) for quantity in quantities]
    with pytest.raises(ValidationError):
        sale_service.record_sale(lines, "cash")
    assert store.sales == ()


def test_unknown_product_rejected(sale_service, store):
    with pytest.raises(NotFoundError):
        sale_service.record_sale([SaleLine("ghost", 1)], "cash")
    assert store.sales == ()


def test_unknown_payment_method_rejected(sale_service, sample_product):
    with pytest.raises(ValidationError):
        sale_service.record_sale([SaleLine(sample_product.id, 1)], "cheque")


def test_sale_credits_customer(sale_service, customer_service, product_service, sample_customer):
    product = product_service.create_product("Crab", "freshFish", "10.00", 5)
    sold_at = datetime(2024, 5, 4, 15, 30)

    sale = sale_service.record_sale(
        [SaleLine(product.id, 2)], "cash", date=sold_at, customer_id=sample_customer.id
    )

    customer = customer_service.get_customer(sample_customer.id)
    assert sale.total == Decimal("20.00")
    assert customer.total_purchases == Decimal("20.00")
    assert customer.last_purchase_date == sold_at


def test_sale_with_unknown_customer_still_recorded(sale_service, product_service, sample_product):
    sale = sale_service.record_sale([SaleLine(sample_product.id, 1)], "cash", customer_id="gone")

    assert sale_service.get_sale(sale.id).customer_id == "gone"
    assert _stock(product_service, sample_product) == 9


def test_failed_save_rolls_back_whole_sale(
    monkeypatch, temp_storage, store, sale_service, sample_product, sample_customer, reload_store
):
    def _raise(collections):
        raise PersistenceError("write failed")

    monkeypatch.setattr(temp_storage, "save_many", _raise)

    with pytest.raises(PersistenceError):
        sale_service.record_sale(
            [SaleLine(sample_product.id, 2)], "cash", customer_id=sample_customer.id
        )

    assert store.sales == ()
    assert store.products[0].stock == 10
    assert store.customers[0].total_purchases == Decimal("0")

    monkeypatch.undo()
    reloaded = reload_store()
    assert reloaded.sales == ()
    assert reloaded.products[0].stock == 10


def test_sale_is_persisted(sale_service, sample_product, sample_customer, reload_store):
    sale = sale_service.record_sale(
        [SaleLine(sample_product.id, 4)], "bank", customer_id=sample_customer.id, notes="Weekend"
    )

    reloaded = reload_store()
    assert reloaded.sales == (sale,)
    assert reloaded.products[0].stock == 6
    assert reloaded.customers[0].total_purchases == Decimal("20.00")


def test_list_and_todays_sales(sale_service, sample_product, sample_customer):
    now = datetime.now()
    older = sale_service.record_sale([SaleLine(sample_product.id, 1)], "cash", date=now - timedelta(days=2))
    newer = sale_service.record_sale(
        [SaleLine(sample_product.id, 1)], "cash", date=now, customer_id=sample_customer.id
    )

    assert sale_service.list_sales() == [newer, older]
    assert sale_service.list_sales(customer_id=sample_customer.id) == [newer]
    assert sale_service.todays_sales(today=now.date()) == [newer]
    assert sale_service.todays_sales(today=date(2000, 1, 1)) == []
