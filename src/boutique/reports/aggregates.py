# src/boutique/reports/aggregates.py
"""
AGGREGATES OVER RECORD COLLECTIONS
Pure reductions; missing or non-numeric fields count as zero.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any, Dict, Iterable

from boutique.core.models import PaymentMethod
from boutique.reports.periods import parse_record_date
from boutique.utils.calculations import Number, to_number

# JSON keys of the stored records, by attribute name
_ALIASES = {
    'customer_name': 'customerName',
    'payment_method': 'paymentMethod',
    'is_paid': 'isPaid',
}


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
        return record.get(_ALIASES.get(name, name), default)
    return getattr(record, name, default)


def sum_amount(records: Iterable[Any], field: str) -> Number:
    """Sum of a numeric field; 0 for an empty collection."""
    return sum(to_number(_field(record, field)) for record in records)


def net_profit(sales: Iterable[Any], expenses: Iterable[Any]) -> Number:
    """Revenue minus expenses."""
    return sum_amount(sales, 'total') - sum_amount(expenses, 'amount')


def outstanding_debt(sales: Iterable[Any]) -> Number:
    """Total of debt sales not yet paid."""
    return sum_amount(
        (
            sale for sale in sales
            if _field(sale, 'payment_method') == PaymentMethod.DEBT.value
            and not _field(sale, 'is_paid', False)
        ),
        'total'
    )


def unique_customer_count(sales: Iterable[Any]) -> int:
    """Distinct customer names, compared exactly."""
    return len({_field(sale, 'customer_name') for sale in sales})


def sum_by_category(expenses: Iterable[Any]) -> Dict[str, Number]:
    """Expense amounts per category, in order of first appearance."""
    totals: Dict[str, Number] = {}
    for expense in expenses:
        category = _field(expense, 'category') or ''
        totals[category] = totals.get(category, 0) + to_number(_field(expense, 'amount'))
    return totals


def total_stock(products: Iterable[Any]) -> int:
    return int(sum_amount(products, 'stock'))


def stock_value(products: Iterable[Any]) -> Number:
    """Inventory value at selling price."""
    return sum(
        to_number(_field(product, 'stock')) * to_number(_field(product, 'price'))
        for product in products
    )


def count_on_day(records: Iterable[Any], day: date) -> int:
    return sum(1 for record in records if parse_record_date(_field(record, 'date')) == day)
