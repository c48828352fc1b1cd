"""Record services: products, sales, expenses, settings and dashboard."""

from .dashboard_service import DashboardService
from .expense_service import ExpenseService
from .product_service import ProductService
from .sale_service import SaleService
from .settings_service import SettingsService

__all__ = [
    'DashboardService',
    'ExpenseService',
    'ProductService',
    'SaleService',
    'SettingsService',
]
