# src/boutique/reports/orchestrator.py
"""
REPORT ORCHESTRATOR
Period filter -> aggregates -> renderer, then hand-off to the exporter.
Holds no record state: every call works on the collections it is given.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel

from boutique.core.exceptions import RecordNotFoundError
from boutique.core.models import Expense, Sale, ShopSettings
from boutique.reports import html_renderer, layout_renderer
from boutique.reports.aggregates import net_profit, outstanding_debt, sum_amount, unique_customer_count
from boutique.reports.documents import RenderedDocument, RenderMode, ReportKind
from boutique.reports.labels import get_labels
from boutique.reports.periods import coerce_period, filter_by_period

logger = logging.getLogger(__name__)

FILENAME_PREFIXES = {
    ReportKind.SALES: 'rapport-ventes',
    ReportKind.EXPENSES: 'rapport-charges',
    ReportKind.BALANCE: 'bilan',
}


class ExportResult(BaseModel):
    path: Path
    shared: bool = False


def coerce_kind(kind: Any) -> ReportKind:
    """ReportKind for kind; raises ValueError for anything else."""
    if isinstance(kind, ReportKind):
        return kind
    try:
        return ReportKind(kind)
    except ValueError:
        raise ValueError(f"Unknown report kind: {kind}") from None


def invoice_filename(sale: Sale) -> str:
    customer = '-'.join((sale.customer_name or '').split())
    return f"facture-{sale.id}-{customer}"


class ReportOrchestrator:
    """Builds reports and invoices and forwards them to the export collaborators."""

    def __init__(
        self,
        locale: str = 'fr',
        render_mode: Any = RenderMode.HTML,
        now: Optional[Callable[[], datetime]] = None,
        exporter: Any = None,
        sharer: Any = None
    ):
        self.locale = locale
        self.render_mode = RenderMode(render_mode)
        self.now = now or datetime.now
        self.exporter = exporter
        self.sharer = sharer

    def _filename(self, kind: ReportKind, period: Any) -> str:
        period = coerce_period(period)
        period_part = period.value if period is not None else 'all'
        return f"{FILENAME_PREFIXES[kind]}-{period_part}-{self.now().strftime('%Y-%m-%d')}"

    def produce_report(
        self,
        kind: Any,
        period: Any,
        sales: Sequence[Sale],
        expenses: Sequence[Expense],
        settings: ShopSettings
    ) -> RenderedDocument:
        """
        Filter the relevant collections by period and render the report.

        Args:
            kind: ReportKind or its value
            period: FilterPeriod or its value; unknown periods keep every record

        Raises:
            ValueError: Unknown report kind
        """
        kind = coerce_kind(kind)
        reference = self.now()
        generated_on = reference.date() if isinstance(reference, datetime) else reference
        labels = get_labels(self.locale)
        html = None
        commands = []

        if kind == ReportKind.SALES:
            sales = filter_by_period(sales, period, reference)
            totals = {'total': sum_amount(sales, 'total'), 'count': len(sales),
                      'debt': outstanding_debt(sales), 'customers': unique_customer_count(sales)}
            if self.render_mode == RenderMode.HTML:
                html = html_renderer.render_sales_report_html(sales, period, settings, self.locale, generated_on)
            else:
                commands = layout_renderer.render_sales_report_layout(sales, period, settings, self.locale, generated_on)

        elif kind == ReportKind.EXPENSES:
            expenses = filter_by_period(expenses, period, reference)
            totals = {'total': sum_amount(expenses, 'amount'), 'count': len(expenses)}
            if self.render_mode == RenderMode.HTML:
                html = html_renderer.render_expenses_report_html(expenses, period, settings, self.locale, generated_on)
            else:
                commands = layout_renderer.render_expenses_report_layout(
                    expenses, period, settings, self.locale, generated_on
                )

        else:
            sales = filter_by_period(sales, period, reference)
            expenses = filter_by_period(expenses, period, reference)
            totals = {'sales': sum_amount(sales, 'total'), 'expenses': sum_amount(expenses, 'amount'),
                      'net': net_profit(sales, expenses)}
            if self.render_mode == RenderMode.HTML:
                html = html_renderer.render_balance_report_html(
                    sales, expenses, period, settings, self.locale, generated_on
                )
            else:
                commands = layout_renderer.render_balance_report_layout(
                    sales, expenses, period, settings, self.locale, generated_on
                )

        logger.info(f"Report produced: {kind.value} / {period} ({self.render_mode.value})")
        return RenderedDocument(
            kind=kind.value,
            title=labels['titles'][kind.value],
            filename=self._filename(kind, period),
            mode=self.render_mode,
            html=html,
            commands=commands,
            totals=totals,
        )

    def produce_invoice(self, sale_id: str, sales: Sequence[Sale], settings: ShopSettings) -> RenderedDocument:
        """
        Render the invoice of one sale.

        Raises:
            RecordNotFoundError: No sale with that id
        """
        sale = next((s for s in sales if s.id == sale_id), None)
        if sale is None:
            raise RecordNotFoundError('Sale', sale_id)

        reference = self.now()
        generated_on = reference.date() if isinstance(reference, datetime) else reference
        html = None
        commands = []
        if self.render_mode == RenderMode.HTML:
            html = html_renderer.render_invoice_html(sale, settings, self.locale, generated_on)
        else:
            commands = layout_renderer.render_invoice_layout(sale, settings, self.locale, generated_on)

        logger.info(f"Invoice produced for sale {sale_id}")
        return RenderedDocument(
            kind='invoice',
            title=get_labels(self.locale)['titles']['invoice'],
            filename=invoice_filename(sale),
            mode=self.render_mode,
            html=html,
            commands=commands,
            totals={'total': sale.total},
        )

    def export(self, document: RenderedDocument) -> ExportResult:
        """
        Write the document out and share it when a share target is available.

        Raises:
            ExportError, ShareError: propagated unchanged from the collaborators
        """
        if self.exporter is None:
            raise RuntimeError("No exporter configured")
        try:
            path = self.exporter.export(document)
            shared = False
            if self.sharer is not None and self.sharer.is_available():
                self.sharer.share(path)
                shared = True
            return ExportResult(path=path, shared=shared)
        except Exception as e:
            logger.error(f"Export of '{document.filename}' failed: {e}")
            raise
