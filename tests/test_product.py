"""Tests for the product service."""

from decimal import Decimal

import pytest

from shopkeep.domain.entities import ProductCategory, SaleLine
from shopkeep.domain.errors import NotFoundError, ValidationError


def test_create_product(product_service):
    product = product_service.create_product(
        name="  Red Snapper ",
        category="freshFish",
        price="18.00",
        stock=6,
        description="Whole fish",
    )

    assert product.name == "Red Snapper"
    assert product.category == ProductCategory.FRESH_FISH
    assert product.price == Decimal("18.00")
    assert product.stock == 6
    assert product.created_at == product.updated_at
    assert product_service.get_product(product.id) == product


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "   "},
        {"price": "-1"},
        {"price": "abc"},
        {"stock": -1},
        {"stock": 2.5},
        {"category": "meat"},
    ],
)
def test_create_product_rejects_invalid_input(product_service, store, kwargs):
    fields = {"name": "Tilapia", "category": "freshFish", "price": "5", "stock": 1}
    fields.update(kwargs)

    with pytest.raises(ValidationError):
        product_service.create_product(**fields)

    assert store.products == ()


def test_list_products_filters(product_service):
    product_service.create_product("Tilapia", "freshFish", "5", 10)
    product_service.create_product("Frozen Tilapia", "frozenFish", "4", 10)
    product_service.create_product("Ginger", "spices", "1", 10)

    assert [p.name for p in product_service.list_products(search="tilapia")] == [
        "Tilapia",
        "Frozen Tilapia",
    ]
    assert [p.name for p in product_service.list_products(category="frozenFish")] == [
        "Frozen Tilapia"
    ]
    assert [
        p.name for p in product_service.list_products(search="TILAPIA", category=ProductCategory.FRESH_FISH)
    ] == ["Tilapia"]
    assert len(product_service.list_products()) == 3


def test_update_product_partial(product_service, sample_product):
    updated = product_service.update_product(sample_product.id, price="6.50")

    assert updated.price == Decimal("6.50")
    assert updated.name == sample_product.name
    assert updated.stock == sample_product.stock


def test_update_product_validates(product_service, sample_product):
    with pytest.raises(ValidationError):
        product_service.update_product(sample_product.id, stock=-3)
    with pytest.raises(ValidationError):
        product_service.update_product(sample_product.id, name="")
    with pytest.raises(ValidationError):
        product_service.update_product(sample_product.id, created_at=None)

    assert product_service.get_product(sample_product.id) == sample_product


def test_update_missing_product(product_service):
    with pytest.raises(NotFoundError):
        product_service.update_product("nope", price="1")


def test_delete_product_keeps_history(product_service, sale_service, report_service, sample_product):
    sale = sale_service.record_sale([SaleLine(sample_product.id, 2)], "cash")

    product_service.delete_product(sample_product.id)

    assert product_service.get_product(sample_product.id) is None
    assert sale_service.get_sale(sale.id) == sale
    stats = report_service.dashboard()
    assert stats.total_revenue == Decimal("10.00")
    assert stats.top_selling_products == ()


def test_delete_missing_product(product_service):
    with pytest.raises(NotFoundError):
        product_service.delete_product("nope")
