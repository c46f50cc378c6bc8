"""Shared pytest fixtures for shopkeep tests."""

import os
import tempfile
from decimal import Decimal

import pytest

from shopkeep.database.factories import create_sqlite_storage
from shopkeep.domain.customer import CustomerService
from shopkeep.domain.expense import ExpenseService
from shopkeep.domain.inventory import InventoryService
from shopkeep.domain.product import ProductService
from shopkeep.domain.reports import ReportService
from shopkeep.domain.sale import SaleService
from shopkeep.domain.store import EntityStore


@pytest.fixture
def temp_storage():
    """Create a temporary SQLite storage for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()

    yield storage

    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(temp_storage):
    """Create a loaded EntityStore over the temporary storage."""
    entity_store = EntityStore(temp_storage)
    entity_store.load()
    return entity_store


@pytest.fixture
def reload_store(temp_storage):
    """Return a callable that loads a fresh store from the same storage."""

    def _reload():
        fresh = EntityStore(temp_storage)
        fresh.load()
        return fresh

    return _reload


@pytest.fixture
def product_service(store):
    return ProductService(store)


@pytest.fixture
def sale_service(store):
    return SaleService(store)


@pytest.fixture
def inventory_service(store):
    return InventoryService(store)


@pytest.fixture
def customer_service(store):
    return CustomerService(store)


@pytest.fixture
def expense_service(store):
    return ExpenseService(store)


@pytest.fixture
def report_service(store):
    return ReportService(store)


@pytest.fixture
def sample_product(product_service):
    """Product A: stock 10 at 5.00."""
    return product_service.create_product(
        name="Tilapia", category="freshFish", price=Decimal("5.00"), stock=10
    )


@pytest.fixture
def second_product(product_service):
    return product_service.create_product(
        name="Sobolo", category="drinks", price=Decimal("2.50"), stock=4
    )


@pytest.fixture
def sample_customer(customer_service):
    return customer_service.create_customer(name="Ama Mensah", phone_number="0244000000")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
