from pathlib import Path

import pytest

from boutique.core.exceptions import ExportError, RecordNotFoundError, ShareError
from boutique.reports.documents import RenderMode, ReportKind
from boutique.reports.orchestrator import ReportOrchestrator, invoice_filename


class RecordingExporter:
    def __init__(self, fail=False):
        self.fail = fail
        self.documents = []

    def export(self, document):
        if self.fail:
            raise ExportError("disk full")
        self.documents.append(document)
        return Path("/exports") / f"{document.filename}.{document.extension}"


class RecordingSharer:
    def __init__(self, available=True, fail=False):
        self.available = available
        self.fail = fail
        self.shared = []

    def is_available(self):
        return self.available

    def share(self, path):
        if self.fail:
            raise ShareError("cancelled")
        self.shared.append(path)


def test_sales_report_filters_by_period(june_sales, june_expenses, settings, clock):
    orchestrator = ReportOrchestrator(now=clock)
    document = orchestrator.produce_report("sales", "day", june_sales, june_expenses, settings)

    assert document.kind == "sales"
    assert document.mode == RenderMode.HTML
    assert document.totals["total"] == 500
    assert document.totals["debt"] == 500
    assert "Fatou" in document.html
    assert "Moussa" not in document.html
    assert document.filename == "rapport-ventes-day-2024-06-15"


def test_balance_report_totals(june_sales, june_expenses, settings, clock):
    orchestrator = ReportOrchestrator(now=clock)
    document = orchestrator.produce_report(ReportKind.BALANCE, "month", june_sales, june_expenses, settings)
    assert document.totals == {"sales": 1500, "expenses": 300, "net": 1200}
    assert document.filename.startswith("bilan-month-")


def test_expenses_report_in_layout_mode(june_sales, june_expenses, settings, clock):
    orchestrator = ReportOrchestrator(render_mode="layout", now=clock)
    document = orchestrator.produce_report("expenses", "quarter", june_sales, june_expenses, settings)
    assert document.html is None
    assert document.extension == "pdf"
    assert "TOTAL: -300 FCFA" in document.texts()
    assert document.filename == "rapport-charges-quarter-2024-06-15"


def test_unknown_kind_is_rejected(settings, clock):
    with pytest.raises(ValueError):
        ReportOrchestrator(now=clock).produce_report("inventory", "day", [], [], settings)


def test_invoice_for_unknown_sale(june_sales, settings, clock):
    with pytest.raises(RecordNotFoundError):
        ReportOrchestrator(now=clock).produce_invoice("missing", june_sales, settings)


def test_invoice_ignores_period(june_sales, settings, clock):
    document = ReportOrchestrator(now=clock).produce_invoice("1", june_sales, settings)
    assert document.kind == "invoice"
    assert document.filename == "facture-1-Moussa"
    assert document.totals == {"total": 1000}


def test_invoice_filename_dashes_spaces(june_sales):
    sale = june_sales[0].model_copy(update={"customer_name": "Awa  Ba Diop"})
    assert invoice_filename(sale) == "facture-1-Awa-Ba-Diop"


def test_export_then_share(june_sales, settings, clock):
    exporter, sharer = RecordingExporter(), RecordingSharer()
    orchestrator = ReportOrchestrator(now=clock, exporter=exporter, sharer=sharer)
    document = orchestrator.produce_invoice("2", june_sales, settings)

    result = orchestrator.export(document)
    assert result.path == Path("/exports/facture-2-Fatou.html")
    assert result.shared
    assert sharer.shared == [result.path]


def test_export_without_share_target(june_sales, settings, clock):
    sharer = RecordingSharer(available=False)
    orchestrator = ReportOrchestrator(now=clock, exporter=RecordingExporter(), sharer=sharer)
    result = orchestrator.export(orchestrator.produce_invoice("2", june_sales, settings))
    assert not result.shared
    assert sharer.shared == []


def test_export_failures_propagate(june_sales, settings, clock):
    orchestrator = ReportOrchestrator(now=clock, exporter=RecordingExporter(fail=True))
    with pytest.raises(ExportError):
        orchestrator.export(orchestrator.produce_invoice("1", june_sales, settings))

    orchestrator = ReportOrchestrator(
        now=clock, exporter=RecordingExporter(), sharer=RecordingSharer(fail=True)
    )
    with pytest.raises(ShareError):
        orchestrator.export(orchestrator.produce_invoice("1", june_sales, settings))
