# src/boutique/reports/html_renderer.py
"""
HTML REPORT RENDERER
Full-text HTML for the sales, expenses and balance reports and the invoice.
Records are rendered as given: period filtering happens before this module.
"""

from datetime import date
from html import escape
from typing import Any, Dict, List, Optional, Sequence

from boutique.core.models import Expense, Sale, ShopSettings
from boutique.reports.aggregates import sum_amount
from boutique.reports.labels import get_labels, payment_label, period_label
from boutique.reports.periods import format_record_date
from boutique.utils.calculations import format_amount

PRIMARY_COLOR = "#8B5CF6"
EXPENSE_COLOR = "#EF4444"
PROFIT_COLOR = "#10B981"

_STYLE = """
          body {{ font-family: Arial, sans-serif; margin: 24px; }}
          h1 {{ color: {accent}; }}
          .logo {{ float: right; margin-top: 0; margin-bottom: 16px; max-height: 60px; }}
          .shop {{ font-size: 18px; font-weight: bold; }}
          .contact {{ clear: right; text-align: right; font-size: 14px; color: #64748B; margin-bottom: 8px; }}
          table {{ width: 100%; border-collapse: collapse; margin-top: 24px; }}
          th, td {{ border: 1px solid #E2E8F0; padding: 8px; font-size: 12px; }}
          th {{ background: #F3F4F6; }}
          tfoot td {{ font-weight: bold; background: #F3F4F6; }}
          .paid {{ color: {profit}; font-weight: bold; }}
          .unpaid {{ color: {loss}; font-weight: bold; }}
          .net-positive {{ color: {profit}; }}
          .net-negative {{ color: {loss}; }}
"""


def _text(value: Any) -> str:
    return escape(str(value if value is not None else ''), quote=False)


def items_description(sale: Sale) -> str:
    """'Riz (x2), Huile (x1)'"""
    return ', '.join(f"{item.product_name} (x{item.quantity})" for item in sale.items)


def _header(settings: ShopSettings, title: str, labels: Dict[str, Any],
            generated_on: date, period: Any = None, locale: str = 'fr') -> str:
    parts = []
    if settings.has_logo:
        parts.append(f'<img src="{escape(settings.logo_uri, quote=True)}" class="logo" />')
    parts.append(f'<div class="shop">{_text(settings.name)}</div>')

    contact = [value for value in (settings.phone, settings.email, settings.address) if value]
    if contact:
        lines = ''.join(f'<div>{_text(value)}</div>' for value in contact)
        parts.append(f'<div class="contact">{lines}</div>')

    parts.append(f'<h1>{_text(title)}</h1>')
    if period is not None:
        parts.append(f"<p><strong>{labels['period']} :</strong> {_text(period_label(period, locale))}</p>")
    parts.append(f"<p><strong>{labels['generated_on']} :</strong> {format_record_date(generated_on)}</p>")
    return '\n        '.join(parts)


def _page(body: str, accent: str = PRIMARY_COLOR) -> str:
    style = _STYLE.format(accent=accent, profit=PROFIT_COLOR, loss=EXPENSE_COLOR)
    return f"""<html>
      <head>
        <meta charset="utf-8" />
        <style>{style}        </style>
      </head>
      <body>
        {body}
      </body>
    </html>
"""


def _table(headers: Sequence[str], rows: List[Sequence[str]], footer_label: str, footer_value: str) -> str:
    head = ''.join(f'<th>{_text(h)}</th>' for h in headers)
    body = ''.join(
        '<tr>' + ''.join(f'<td>{cell}</td>' for cell in row) + '</tr>'
        for row in rows
    )
    return (
        '<table>'
        f'<thead><tr>{head}</tr></thead>'
        f'<tbody>{body}</tbody>'
        f'<tfoot><tr><td colspan="{len(headers) - 1}">{_text(footer_label)}</td>'
        f'<td>{footer_value}</td></tr></tfoot>'
        '</table>'
    )


def render_sales_report_html(sales: Sequence[Sale], period: Any, settings: ShopSettings,
                             locale: str = 'fr', generated_on: Optional[date] = None) -> str:
    labels = get_labels(locale)
    generated_on = generated_on or date.today()
    total = sum_amount(sales, 'total')

    rows = [
        [
            _text(sale.date),
            _text(sale.customer_name),
            _text(items_description(sale)),
            _text(payment_label(sale.payment_method, locale)),
            format_amount(sale.total),
        ]
        for sale in sales
    ]
    headers = [labels['date'], labels['customer'], labels['items'], labels['payment'], labels['amount']]

    body = _header(settings, labels['titles']['sales'], labels, generated_on, period, locale)
    body += '\n        ' + _table(headers, rows, labels['total'], format_amount(total))
    return _page(body)


def render_expenses_report_html(expenses: Sequence[Expense], period: Any, settings: ShopSettings,
                                locale: str = 'fr', generated_on: Optional[date] = None) -> str:
    labels = get_labels(locale)
    generated_on = generated_on or date.today()
    total = sum_amount(expenses, 'amount')

    rows = [
        [
            _text(expense.date),
            _text(expense.description),
            _text(expense.category),
            format_amount(expense.amount, negate=True),
        ]
        for expense in expenses
    ]
    headers = [labels['date'], labels['description'], labels['category'], labels['amount']]

    body = _header(settings, labels['titles']['expenses'], labels, generated_on, period, locale)
    body += '\n        ' + _table(headers, rows, labels['total'], format_amount(total, negate=True))
    return _page(body, accent=EXPENSE_COLOR)


def render_balance_report_html(sales: Sequence[Sale], expenses: Sequence[Expense], period: Any,
                               settings: ShopSettings, locale: str = 'fr',
                               generated_on: Optional[date] = None) -> str:
    labels = get_labels(locale)
    generated_on = generated_on or date.today()
    total_sales = sum_amount(sales, 'total')
    total_expenses = sum_amount(expenses, 'amount')
    net = total_sales - total_expenses

    sales_rows = [
        [_text(sale.date), _text(sale.customer_name), format_amount(sale.total)]
        for sale in sales
    ]
    expense_rows = [
        [_text(expense.date), _text(expense.description), format_amount(expense.amount, negate=True)]
        for expense in expenses
    ]
    net_class = 'net-positive' if net >= 0 else 'net-negative'

    body = _header(settings, labels['titles']['balance'], labels, generated_on, period, locale)
    body += f"\n        <h2>{labels['income']}</h2>"
    body += '\n        ' + _table(
        [labels['date'], labels['customer'], labels['amount']],
        sales_rows, labels['income_subtotal'], format_amount(total_sales)
    )
    body += f"\n        <h2>{labels['charges']}</h2>"
    body += '\n        ' + _table(
        [labels['date'], labels['description'], labels['amount']],
        expense_rows, labels['charges_subtotal'], format_amount(total_expenses, negate=True)
    )
    body += f"\n        <h2 class=\"{net_class}\">{labels['net_profit']} : {format_amount(net)}</h2>"
    return _page(body)


def render_invoice_html(sale: Sale, settings: ShopSettings, locale: str = 'fr',
                        generated_on: Optional[date] = None) -> str:
    labels = get_labels(locale)
    generated_on = generated_on or date.today()

    if sale.is_unpaid_debt:
        status = f'<span class="unpaid">{labels["unpaid"]}</span>'
    else:
        status = f'<span class="paid">{labels["paid"]}</span>'

    rows = ''.join(
        '<tr>'
        f'<td>{_text(item.product_name)}</td>'
        f'<td>{item.quantity}</td>'
        f'<td>{format_amount(item.price)}</td>'
        f'<td>{format_amount(item.line_total)}</td>'
        '</tr>'
        for item in sale.items
    )
    headers = ''.join(
        f'<th>{h}</th>'
        for h in (labels['article'], labels['quantity'], labels['unit_price'], labels['line_total'])
    )

    body = _header(settings, labels['titles']['invoice'], labels, generated_on)
    body += f"""
        <p><strong>{labels['invoice_number']}:</strong> {_text(sale.id)}</p>
        <p><strong>{labels['date']}:</strong> {_text(sale.date)}</p>
        <p><strong>{labels['customer']}:</strong> {_text(sale.customer_name)}</p>
        <p><strong>{labels['payment_method']}:</strong> {_text(payment_label(sale.payment_method, locale))}</p>
        <p><strong>{labels['status']}:</strong> {status}</p>
        <table>
          <thead><tr>{headers}</tr></thead>
          <tbody>{rows}</tbody>
        </table>
        <h2>{labels['amount_due']} : {format_amount(sale.total)}</h2>"""
    return _page(body)
