import sqlite3

import pytest

from boutique.core.exceptions import RecordNotFoundError
from boutique.core.models import DEFAULT_SHOP_NAME
from boutique.services import DashboardService, ExpenseService, ProductService, SaleService, SettingsService


@pytest.fixture
def product_service(state, clock):
    return ProductService(state, clock)


@pytest.fixture
def sale_service(state, clock):
    return SaleService(state, clock)


@pytest.fixture
def stocked(product_service):
    rice = product_service.create_product({"name": "Riz", "category": "Alimentation", "price": 500, "stock": 10})
    oil = product_service.create_product({"name": "Huile", "category": "Alimentation", "price": 1200, "stock": 2})
    return rice, oil


def test_create_product_prepends_and_persists(product_service, stocked, repo):
    rice, oil = stocked
    assert [p.name for p in product_service.list_products()] == ["Huile", "Riz"]
    assert rice.id != oil.id
    assert [p.name for p in repo.load_products()] == ["Huile", "Riz"]


def test_create_product_requires_fields(product_service):
    with pytest.raises(ValueError):
        product_service.create_product({"name": "Riz", "price": 500, "stock": 1, "category": ""})


def test_search_products(product_service, stocked):
    assert [p.name for p in product_service.search_products("riz")] == ["Riz"]
    assert len(product_service.search_products("ALIMENT")) == 2
    assert len(product_service.search_products("")) == 2


def test_adjust_stock_is_clamped(product_service, stocked):
    rice, _ = stocked
    assert product_service.adjust_stock(rice.id, -4).stock == 6
    assert product_service.adjust_stock(rice.id, -50).stock == 0


def test_unknown_product(product_service):
    with pytest.raises(RecordNotFoundError):
        product_service.get_product("nope")
    with pytest.raises(RecordNotFoundError):
        product_service.delete_product("nope")


def test_create_sale_recomputes_total_and_takes_stock(sale_service, product_service, stocked):
    rice, oil = stocked
    sale = sale_service.create_sale(
        "Awa", [{"product_id": rice.id, "quantity": 3}, {"product_id": oil.id, "quantity": 5}], "cash"
    )
    assert sale.total == 3 * 500 + 5 * 1200
    assert sale.date == "15/06/2024"
    assert sale.status == "completed"
    assert sale.is_paid
    assert sale.items[0].product_name == "Riz"
    assert product_service.get_product(rice.id).stock == 7
    assert product_service.get_product(oil.id).stock == 0


def test_debt_sale_starts_unpaid_and_can_be_settled(sale_service, stocked, state):
    rice, _ = stocked
    sale = sale_service.create_sale("Fatou", [{"product_id": rice.id, "quantity": 1}], "debt")
    assert not sale.is_paid

    dashboard = DashboardService(state)
    assert dashboard.summary()["outstanding_debt"] == 500

    settled = sale_service.settle_debt(sale.id)
    assert settled.is_paid
    assert dashboard.summary()["outstanding_debt"] == 0


def test_sale_requires_items_and_customer(sale_service):
    with pytest.raises(ValueError):
        sale_service.create_sale("Awa", [], "cash")
    with pytest.raises(ValueError):
        sale_service.create_sale(" ", [{"product_id": "x", "product_name": "X", "quantity": 1}], "cash")


def test_sale_with_unknown_payment_method(sale_service, stocked):
    rice, _ = stocked
    with pytest.raises(ValueError):
        sale_service.create_sale("Awa", [{"product_id": rice.id, "quantity": 1}], "bitcoin")


def test_update_sale_restores_then_takes_stock(sale_service, product_service, stocked):
    rice, oil = stocked
    sale = sale_service.create_sale("Awa", [{"product_id": rice.id, "quantity": 4}], "cash")
    assert product_service.get_product(rice.id).stock == 6

    updated = sale_service.update_sale(sale.id, "Awa Ba", [{"product_id": oil.id, "quantity": 1}], "wave")
    assert updated.date == sale.date
    assert updated.total == 1200
    assert updated.customer_name == "Awa Ba"
    assert product_service.get_product(rice.id).stock == 10
    assert product_service.get_product(oil.id).stock == 1


def test_settled_debt_stays_settled_on_edit(sale_service, stocked):
    rice, _ = stocked
    sale = sale_service.create_sale("Fatou", [{"product_id": rice.id, "quantity": 1}], "debt")
    sale_service.settle_debt(sale.id)
    updated = sale_service.update_sale(sale.id, "Fatou", [{"product_id": rice.id, "quantity": 2}], "debt")
    assert updated.is_paid

    switched = sale_service.create_sale("Moussa", [{"product_id": rice.id, "quantity": 1}], "cash")
    assert not sale_service.update_sale(switched.id, "Moussa", [{"product_id": rice.id, "quantity": 1}],
                                        "debt").is_paid


def test_delete_sale_restores_stock(sale_service, product_service, stocked):
    rice, _ = stocked
    sale = sale_service.create_sale("Awa", [{"product_id": rice.id, "quantity": 4}], "cash")
    assert sale_service.delete_sale(sale.id)
    assert product_service.get_product(rice.id).stock == 10
    assert sale_service.list_sales() == []


def test_search_and_todays_sales(sale_service, stocked):
    rice, oil = stocked
    sale_service.create_sale("Awa", [{"product_id": rice.id, "quantity": 1}], "cash")
    sale_service.create_sale("Moussa", [{"product_id": oil.id, "quantity": 1}], "orange")
    assert [s.customer_name for s in sale_service.search_sales("huile")] == ["Moussa"]
    assert [s.customer_name for s in sale_service.search_sales("awa")] == ["Awa"]
    assert len(sale_service.todays_sales()) == 2


def test_expenses(state, clock):
    service = ExpenseService(state, clock)
    rent = service.create_expense({"description": "Loyer juin", "amount": 50000, "category": "Loyer"})
    service.create_expense({"description": "Facture SDE", "amount": "7500", "category": "Eau"})

    assert [e.description for e in service.list_expenses()] == ["Facture SDE", "Loyer juin"]
    assert service.monthly_total() == 57500
    assert service.totals_by_category() == {"Eau": 7500, "Loyer": 50000}
    assert [e.id for e in service.search_expenses("loyer")] == [rent.id]

    updated = service.update_expense(rent.id, {"description": "Loyer", "amount": 45000, "category": "Loyer"})
    assert updated.date == rent.date
    assert service.delete_expense(rent.id)
    assert service.monthly_total() == 7500

    with pytest.raises(ValueError):
        service.create_expense({"description": "", "amount": 1, "category": "Autres"})


def test_expense_categories(state, clock):
    service = ExpenseService(state, clock)
    assert service.list_categories()[0] == "Loyer"
    service.create_expense({"description": "Sacs", "amount": 100, "category": "Emballage"})
    service.create_expense({"description": "Eau", "amount": 100, "category": "Eau"})
    categories = service.list_categories()
    assert categories[-1] == "Emballage"
    assert categories.count("Eau") == 1


def test_settings_update_and_reset(state, product_service, stocked, repo):
    service = SettingsService(state)
    updated = service.update_settings({"name": " Chez Awa ", "logoUri": "data:image/png;base64,AAAA", "phone": "77"})
    assert updated.name == "Chez Awa"
    assert updated.has_logo
    assert repo.load_settings().phone == "77"

    assert service.reset_logo().logo_uri is None

    with pytest.raises(ValueError):
        service.update_settings({"name": ""})

    service.reset_all_data()
    assert state.products == ()
    assert state.settings.name == DEFAULT_SHOP_NAME
    assert repo.load_products() == []
    assert repo.load_settings().name == DEFAULT_SHOP_NAME


def test_dashboard_summary(state, sale_service, stocked, clock):
    rice, oil = stocked
    sale_service.create_sale("Awa", [{"product_id": rice.id, "quantity": 2}], "cash")
    sale_service.create_sale("Awa", [{"product_id": oil.id, "quantity": 1}], "debt")
    ExpenseService(state, clock).create_expense({"description": "Sacs", "amount": 400, "category": "Autres"})

    summary = DashboardService(state).summary(today=clock())
    assert summary == {
        "total_sales": 2200,
        "total_stock": 9,
        "stock_value": 8 * 500 + 1 * 1200,
        "todays_sales": 2,
        "unique_customers": 1,
        "outstanding_debt": 1200,
        "total_expenses": 400,
        "net_profit": 1800,
    }


def test_failed_sale_save_keeps_stock_and_sales(sale_service, product_service, stocked, storage, repo):
    rice, _ = stocked
    with storage.get_cursor() as cursor:
        cursor.execute(
            "CREATE TRIGGER reject_sales BEFORE INSERT ON kv_store WHEN NEW.key = 'sales' "
            "BEGIN SELECT RAISE(ABORT, 'disk full'); END"
        )

    with pytest.raises(sqlite3.Error):
        sale_service.create_sale("Awa", [{"product_id": rice.id, "quantity": 3}], "cash")

    assert product_service.get_product(rice.id).stock == 10
    assert [p.stock for p in repo.load_products() if p.id == rice.id] == [10]
    assert sale_service.list_sales() == []
    assert repo.load_sales() == []
