from datetime import datetime

import pytest

from boutique.core.models import Expense, Product, Sale, SaleItem, ShopSettings
from boutique.core.state import AppState
from boutique.core.storage import StorageManager
from boutique.repositories.store_repo import StoreRepository

# Saturday 15 June 2024
FIXED_NOW = datetime(2024, 6, 15, 10, 30)


def fixed_clock():
    return FIXED_NOW


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def storage(tmp_path):
    manager = StorageManager(tmp_path / "data")
    manager.initialize_storage()
    yield manager
    manager.close_all_connections()


@pytest.fixture
def repo(storage):
    return StoreRepository(storage)


@pytest.fixture
def state(repo):
    app_state = AppState(repo)
    app_state.load()
    return app_state


@pytest.fixture
def settings():
    return ShopSettings(name="Chez Awa", phone="77 000 00 00", email="awa@example.com")


@pytest.fixture
def june_sales():
    return [
        Sale(
            id="1", customer_name="Moussa", date="01/06/2024", total=1000,
            payment_method="cash", is_paid=True,
            items=[SaleItem(product_id="p1", product_name="Riz", quantity=2, price=500)],
        ),
        Sale(
            id="2", customer_name="Fatou", date="15/06/2024", total=500,
            payment_method="debt", is_paid=False,
            items=[SaleItem(product_id="p2", product_name="Huile", quantity=1, price=500)],
        ),
    ]


@pytest.fixture
def june_expenses():
    return [Expense(id="e1", description="Loyer juin", amount=300, category="Loyer", date="10/06/2024")]


@pytest.fixture
def products():
    return [
        Product(id="p1", name="Riz", category="Alimentation", price=500, stock=10),
        Product(id="p2", name="Huile", category="Alimentation", price=500, stock=3),
    ]
