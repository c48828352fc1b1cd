# src/boutique/reports/layout_renderer.py
"""
FIXED-LAYOUT REPORT RENDERER
Emits draw commands for an A4 page (millimetres, origin top-left).
Long customer names and descriptions are truncated to fit their column;
the HTML renderer keeps the full text.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from boutique.core.models import Expense, Sale, ShopSettings
from boutique.reports.aggregates import sum_amount
from boutique.reports.documents import DrawCommand
from boutique.reports.html_renderer import items_description
from boutique.reports.labels import get_labels, payment_label, period_label
from boutique.reports.periods import format_record_date
from boutique.utils.calculations import format_amount

PAGE_BOTTOM = 270
BALANCE_SALES_BOTTOM = 250
PAGE_TOP = 20
LEFT = 20
RIGHT = 190
ROW_HEIGHT = 8

BLACK = (0, 0, 0)
GREEN = (0, 128, 0)
RED = (255, 0, 0)

# Column budgets, in characters
SALES_CUSTOMER_WIDTH = 15
SALES_ITEMS_WIDTH = 20
EXPENSE_DESCRIPTION_WIDTH = 25
BALANCE_CUSTOMER_WIDTH = 20


def truncate(text: str, width: int, ellipsis: str = '') -> str:
    """First width characters of text, plus ellipsis when something was cut."""
    text = text or ''
    if len(text) <= width:
        return text
    return text[:width] + ellipsis


class LayoutBuilder:
    """Accumulates draw commands and tracks the vertical cursor."""

    def __init__(self):
        self.commands: List[DrawCommand] = []
        self.y: float = PAGE_TOP

    def text(self, x: float, y: float, text: str):
        self.commands.append(DrawCommand(op='text', x=x, y=y, text=str(text)))

    def line(self, x: float, y: float, x2: float, y2: float):
        self.commands.append(DrawCommand(op='line', x=x, y=y, x2=x2, y2=y2))

    def font(self, size: float):
        self.commands.append(DrawCommand(op='font', size=size))

    def color(self, rgb: Tuple[int, int, int]):
        self.commands.append(DrawCommand(op='color', rgb=rgb))

    def image(self, data: str, x: float, y: float, width: float, height: float):
        self.commands.append(DrawCommand(op='image', text=data, x=x, y=y, width=width, height=height))

    def new_page(self):
        self.commands.append(DrawCommand(op='page'))
        self.y = PAGE_TOP

    def ensure_room(self, bottom: float = PAGE_BOTTOM):
        if self.y > bottom:
            self.new_page()

    def table_header(self, columns: Sequence[Tuple[str, float]]):
        self.font(10)
        for label, x in columns:
            self.text(x, self.y, label)
        self.line(LEFT, self.y + 2, RIGHT, self.y + 2)
        self.y += 10


def _header(builder: LayoutBuilder, settings: ShopSettings, title: str, labels: Dict[str, Any],
            generated_on: date, period: Any = None, locale: str = 'fr'):
    if settings.has_logo:
        builder.image(settings.logo_uri, 160, 10, 30, 30)

    builder.font(20)
    builder.text(LEFT, 20, (settings.name or '').upper())
    builder.font(16)
    builder.text(LEFT, 30, title.upper())

    y = 30
    contact = [value for value in (settings.phone, settings.email, settings.address) if value]
    if contact:
        builder.font(10)
        for value in contact:
            y += 5
            builder.text(LEFT, y, value)

    builder.font(12)
    y += 15
    if period is not None:
        builder.text(LEFT, y, f"{labels['period']}: {period_label(period, locale)}")
        y += 10
    builder.text(LEFT, y, f"{labels['generated_on']}: {format_record_date(generated_on)}")
    builder.y = y + 20


def _footer_total(builder: LayoutBuilder, text: str):
    builder.y += 10
    builder.ensure_room()
    builder.line(LEFT, builder.y, RIGHT, builder.y)
    builder.y += 10
    builder.font(12)
    builder.text(140, builder.y, text)


def render_sales_report_layout(sales: Sequence[Sale], period: Any, settings: ShopSettings,
                               locale: str = 'fr', generated_on: Optional[date] = None) -> List[DrawCommand]:
    labels = get_labels(locale)
    builder = LayoutBuilder()
    _header(builder, settings, labels['titles']['sales'], labels, generated_on or date.today(), period, locale)

    builder.table_header([
        (labels['date'], 20), (labels['customer'], 50), (labels['items'], 100),
        (labels['payment'], 140), (labels['amount'], 170),
    ])

    for sale in sales:
        builder.ensure_room()
        builder.text(20, builder.y, sale.date)
        builder.text(50, builder.y, truncate(sale.customer_name, SALES_CUSTOMER_WIDTH))
        builder.text(100, builder.y, truncate(items_description(sale), SALES_ITEMS_WIDTH, '...'))
        builder.text(140, builder.y, payment_label(sale.payment_method, locale))
        builder.text(170, builder.y, format_amount(sale.total))
        builder.y += ROW_HEIGHT

    _footer_total(builder, f"{labels['total']}: {format_amount(sum_amount(sales, 'total'))}")
    return builder.commands


def render_expenses_report_layout(expenses: Sequence[Expense], period: Any, settings: ShopSettings,
                                  locale: str = 'fr', generated_on: Optional[date] = None) -> List[DrawCommand]:
    labels = get_labels(locale)
    builder = LayoutBuilder()
    _header(builder, settings, labels['titles']['expenses'], labels, generated_on or date.today(), period, locale)

    builder.table_header([
        (labels['date'], 20), (labels['description'], 60),
        (labels['category'], 120), (labels['amount'], 160),
    ])

    for expense in expenses:
        builder.ensure_room()
        builder.text(20, builder.y, expense.date)
        builder.text(60, builder.y, truncate(expense.description, EXPENSE_DESCRIPTION_WIDTH))
        builder.text(120, builder.y, expense.category)
        builder.text(160, builder.y, format_amount(expense.amount, negate=True))
        builder.y += ROW_HEIGHT

    total = sum_amount(expenses, 'amount')
    _footer_total(builder, f"{labels['total']}: {format_amount(total, negate=True)}")
    return builder.commands


def render_balance_report_layout(sales: Sequence[Sale], expenses: Sequence[Expense], period: Any,
                                 settings: ShopSettings, locale: str = 'fr',
                                 generated_on: Optional[date] = None) -> List[DrawCommand]:
    labels = get_labels(locale)
    builder = LayoutBuilder()
    _header(builder, settings, labels['titles']['balance'], labels, generated_on or date.today(), period, locale)

    total_sales = sum_amount(sales, 'total')
    total_expenses = sum_amount(expenses, 'amount')
    net = total_sales - total_expenses

    # Income
    builder.font(14)
    builder.text(LEFT, builder.y, labels['income'].upper())
    builder.y += 15
    builder.table_header([(labels['date'], 20), (labels['customer'], 60), (labels['amount'], 160)])
    for sale in sales:
        builder.ensure_room(BALANCE_SALES_BOTTOM)
        builder.text(20, builder.y, sale.date)
        builder.text(60, builder.y, truncate(sale.customer_name, BALANCE_CUSTOMER_WIDTH))
        builder.text(160, builder.y, format_amount(sale.total))
        builder.y += ROW_HEIGHT
    builder.y += 5
    builder.font(12)
    builder.text(120, builder.y, f"{labels['income_subtotal']}: {format_amount(total_sales)}")
    builder.y += 20

    # Charges, with room for the section title and the table header
    builder.ensure_room(PAGE_BOTTOM - 25)
    builder.font(14)
    builder.text(LEFT, builder.y, labels['charges'].upper())
    builder.y += 15
    builder.table_header([(labels['date'], 20), (labels['description'], 60), (labels['amount'], 160)])
    for expense in expenses:
        builder.ensure_room()
        builder.text(20, builder.y, expense.date)
        builder.text(60, builder.y, truncate(expense.description, EXPENSE_DESCRIPTION_WIDTH))
        builder.text(160, builder.y, format_amount(expense.amount, negate=True))
        builder.y += ROW_HEIGHT
    builder.y += 5
    builder.ensure_room()
    builder.font(12)
    builder.text(120, builder.y, f"{labels['charges_subtotal']}: {format_amount(total_expenses, negate=True)}")
    builder.y += 20

    # Net
    builder.ensure_room()
    builder.line(LEFT, builder.y, RIGHT, builder.y)
    builder.y += 10
    builder.font(16)
    builder.color(GREEN if net >= 0 else RED)
    builder.text(120, builder.y, f"{labels['net_profit'].upper()}: {format_amount(net)}")
    builder.color(BLACK)
    return builder.commands


def render_invoice_layout(sale: Sale, settings: ShopSettings, locale: str = 'fr',
                          generated_on: Optional[date] = None) -> List[DrawCommand]:
    labels = get_labels(locale)
    builder = LayoutBuilder()
    _header(builder, settings, labels['titles']['invoice'], labels, generated_on or date.today(), locale=locale)

    y = builder.y - 10
    builder.text(LEFT, y, f"{labels['invoice_number']}: {sale.id}")
    builder.text(LEFT, y + 10, f"{labels['date']}: {sale.date}")
    builder.text(LEFT, y + 20, f"{labels['customer']}: {sale.customer_name}")
    builder.text(LEFT, y + 30, f"{labels['payment_method']}: {payment_label(sale.payment_method, locale)}")

    if sale.is_unpaid_debt:
        builder.color(RED)
        builder.text(120, y + 30, f"{labels['status'].upper()}: {labels['unpaid'].upper()}")
    else:
        builder.color(GREEN)
        builder.text(120, y + 30, f"{labels['status'].upper()}: {labels['paid'].upper()}")
    builder.color(BLACK)

    builder.y = y + 50
    builder.table_header([
        (labels['article'], 20), (labels['quantity'], 100),
        (labels['unit_price'], 130), (labels['line_total'], 170),
    ])
    for item in sale.items:
        builder.ensure_room()
        builder.text(20, builder.y, item.product_name)
        builder.text(100, builder.y, str(item.quantity))
        builder.text(130, builder.y, format_amount(item.price))
        builder.text(170, builder.y, format_amount(item.line_total))
        builder.y += ROW_HEIGHT

    builder.y += 10
    builder.ensure_room()
    builder.line(LEFT, builder.y, RIGHT, builder.y)
    builder.y += 10
    builder.font(14)
    builder.text(120, builder.y, f"{labels['amount_due'].upper()}: {format_amount(sale.total)}")

    builder.y += 30
    builder.ensure_room()
    builder.font(10)
    builder.text(LEFT, builder.y, labels['thanks'])
    builder.text(LEFT, builder.y + 10, f"{settings.name} - {labels['tagline']}")
    return builder.commands
