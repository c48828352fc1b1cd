import pytest

from boutique.core.config import load_config
from boutique.core.exceptions import ExportError, RecordNotFoundError
from boutique.integrations import FileExporter, SystemSharer
from boutique.main import BoutiqueApp
from boutique.reports.documents import RenderedDocument, RenderMode

PIXEL_PNG = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def _app(tmp_path, clock, render_mode):
    config = load_config(data_dir=tmp_path / "data", render_mode=render_mode, locale="fr")
    return BoutiqueApp(config, now=clock, sharer=SystemSharer(enabled=False))


def _stock_and_sell(app):
    rice = app.products.create_product({"name": "Riz", "category": "Alimentation", "price": 500, "stock": 20})
    app.sales.create_sale("Awa", [{"product_id": rice.id, "quantity": 2}], "cash")
    debt = app.sales.create_sale("Fatou Ndiaye", [{"product_id": rice.id, "quantity": 1}], "debt")
    app.expenses.create_expense({"description": "Loyer", "amount": 300, "category": "Loyer"})
    return debt


def test_layout_reports_are_written_as_pdf(tmp_path, clock):
    with _app(tmp_path, clock, "layout") as app:
        app.settings.update_settings({"name": "Chez Awa", "logoUri": PIXEL_PNG, "phone": "77 000 00 00"})
        _stock_and_sell(app)

        for kind in ("sales", "expenses", "balance"):
            result = app.generate_report(kind, "month")
            assert result.path.suffix == ".pdf"
            assert result.path.read_bytes().startswith(b"%PDF")
            assert not result.shared

        assert (tmp_path / "data" / "exports" / "bilan-month-2024-06-15.pdf").exists()


def test_invoice_after_settlement_shows_paid(tmp_path, clock):
    with _app(tmp_path, clock, "html") as app:
        debt = _stock_and_sell(app)

        before = app.generate_invoice(debt.id).path.read_text(encoding="utf-8")
        assert '<span class="unpaid">Non payé</span>' in before
        assert app.dashboard.summary(today=clock())["outstanding_debt"] == 500

        app.sales.settle_debt(debt.id)
        result = app.generate_invoice(debt.id)
        assert result.path.name == f"facture-{debt.id}-Fatou-Ndiaye.html"
        assert '<span class="paid">Payé</span>' in result.path.read_text(encoding="utf-8")
        assert app.dashboard.summary(today=clock())["outstanding_debt"] == 0

        with pytest.raises(RecordNotFoundError):
            app.generate_invoice("unknown")


def test_data_survives_restart(tmp_path, clock):
    with _app(tmp_path, clock, "html") as app:
        _stock_and_sell(app)

    with _app(tmp_path, clock, "html") as app:
        assert [p.stock for p in app.products.list_products()] == [17]
        assert len(app.sales.list_sales()) == 2
        assert app.expenses.monthly_total() == 300
        assert (tmp_path / "data" / "logs" / "audit.log").exists()


def test_exporter_wraps_io_errors(tmp_path):
    blocker = tmp_path / "exports"
    blocker.write_text("not a directory")
    document = RenderedDocument(kind="sales", title="Ventes", filename="x", mode=RenderMode.HTML, html="<p/>")
    with pytest.raises(ExportError):
        FileExporter(blocker).export(document)
