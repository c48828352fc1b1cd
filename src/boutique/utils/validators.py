"""
Field-presence validators used by the record services.

They perform light checks and raise ValueError on invalid input.
"""
from typing import Dict, Any, Iterable


def _require(data: Dict[str, Any], fields: Iterable[str], message: str):
	for key in fields:
		value = data.get(key)
		if value is None or (isinstance(value, str) and not value.strip()):
			raise ValueError(message)


def validate_product_data(data: Dict[str, Any]):
	if not isinstance(data, dict):
		raise ValueError("Product data must be an object")
	_require(data, ["name", "price", "stock", "category"], "All product fields are required")


def validate_sale_data(data: Dict[str, Any]):
	"""Customer name, at least one item and a payment method are required."""
	if not isinstance(data, dict):
		raise ValueError("Sale data must be an object")
	_require(data, ["customer_name", "payment_method"],
		"Customer name, at least one item and a payment method are required")
	if not data.get("items"):
		raise ValueError("Customer name, at least one item and a payment method are required")


def validate_expense_data(data: Dict[str, Any]):
	"""Validate expense data."""
	if not isinstance(data, dict):
		raise ValueError("Expense data must be an object")
	_require(data, ["description", "amount", "category"], "All expense fields are required")


def validate_settings_data(data: Dict[str, Any]):
	if not isinstance(data, dict):
		raise ValueError("Settings data must be an object")
	if "name" in data:
		_require(data, ["name"], "Shop name cannot be empty")
