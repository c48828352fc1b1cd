# src/boutique/services/dashboard_service.py
"""
DASHBOARD SERVICE
Headline figures of the shop, computed over all records.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional
import logging

from boutique.core.state import AppState
from boutique.reports import aggregates

logger = logging.getLogger(__name__)


class DashboardService:

    def __init__(self, state: AppState):
        self.state = state

    def summary(self, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Dashboard figures.

        Returns:
            total_sales, total_stock, stock_value, todays_sales (count),
            unique_customers, outstanding_debt, total_expenses, net_profit
        """
        if today is None:
            today = datetime.now().date()
        elif isinstance(today, datetime):
            today = today.date()

        sales = self.state.sales
        expenses = self.state.expenses
        products = self.state.products

        summary = {
            'total_sales': aggregates.sum_amount(sales, 'total'),
            'total_stock': aggregates.total_stock(products),
            'stock_value': aggregates.stock_value(products),
            'todays_sales': aggregates.count_on_day(sales, today),
            'unique_customers': aggregates.unique_customer_count(sales),
            'outstanding_debt': aggregates.outstanding_debt(sales),
            'total_expenses': aggregates.sum_amount(expenses, 'amount'),
            'net_profit': aggregates.net_profit(sales, expenses),
        }
        logger.debug(f"Dashboard summary: {summary}")
        return summary
