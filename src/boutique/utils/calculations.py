"""
Small money and stock helpers shared by services and renderers.
"""
from typing import Any, Iterable, Union

Number = Union[float, int]

CURRENCY = "FCFA"


def to_number(value: Any) -> Number:
	"""Numeric value of a field, 0 when missing or not a number."""
	if isinstance(value, bool):
		return 0
	if isinstance(value, (int, float)):
		return value
	try:
		number = float(value)
	except (TypeError, ValueError):
		return 0
	return int(number) if number.is_integer() else number


def line_total(quantity: Number, price: Number) -> Number:
	return to_number(quantity) * to_number(price)


def compute_sale_total(items: Iterable[Any]) -> Number:
	"""Sum of quantity x price over sale line items."""
	return sum(line_total(item.quantity, item.price) for item in items)


def clamp_stock(stock: Number) -> int:
	return max(0, int(stock))


def format_number(value: Number) -> str:
	"""Integral amounts without decimals, others as given."""
	value = to_number(value)
	if isinstance(value, float) and value.is_integer():
		value = int(value)
	return str(value)


def format_amount(value: Number, negate: bool = False) -> str:
	"""'1500 FCFA', or '-300 FCFA' for a negated amount."""
	text = format_number(value)
	if negate:
		text = f"-{text}"
	return f"{text} {CURRENCY}"
