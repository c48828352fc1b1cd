# src/boutique/services/expense_service.py
"""
EXPENSE SERVICE - Business Logic Layer
"""

from datetime import datetime
from typing import List, Dict, Any, Optional
import logging

from boutique.core.exceptions import RecordNotFoundError
from boutique.core.logger import audit_log
from boutique.core.models import EXPENSE_CATEGORIES, Expense
from boutique.core.state import AppState
from boutique.reports.aggregates import sum_amount, sum_by_category
from boutique.reports.periods import FilterPeriod, filter_by_period
from boutique.services.common import Clock, matches, new_record_id, today_string
from boutique.utils.calculations import Number, to_number
from boutique.utils.validators import validate_expense_data

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for shop expenses (rent, salaries, deliveries ...)"""

    def __init__(self, state: AppState, now: Optional[Clock] = None):
        self.state = state
        self.now = now

    def list_expenses(self) -> List[Expense]:
        return list(self.state.expenses)

    def search_expenses(self, query: str) -> List[Expense]:
        """Expenses whose description or category contains query."""
        return [e for e in self.state.expenses if matches(query, e.description, e.category)]

    def get_expense(self, expense_id: str) -> Expense:
        for expense in self.state.expenses:
            if expense.id == expense_id:
                return expense
        raise RecordNotFoundError('Expense', expense_id)

    def create_expense(self, expense_data: Dict[str, Any]) -> Expense:
        """Record an expense dated today."""
        try:
            validate_expense_data(expense_data)

            expense = Expense(
                id=new_record_id((e.id for e in self.state.expenses), self.now),
                description=expense_data['description'].strip(),
                amount=to_number(expense_data['amount']),
                category=str(expense_data['category']).strip(),
                date=today_string(self.now),
            )
            self.state.commit(expenses=[expense] + list(self.state.expenses))

            audit_log(
                action="create_expense",
                record_type="expenses",
                record_id=expense.id,
                new_values=expense.to_storage()
            )
            return expense

        except Exception as e:
            logger.error(f"Service: Failed to create expense: {e}")
            raise

    def update_expense(self, expense_id: str, expense_data: Dict[str, Any]) -> Expense:
        """Edit an expense; its date is kept."""
        try:
            current = self.get_expense(expense_id)
            validate_expense_data(expense_data)

            updated = current.model_copy(update={
                'description': expense_data['description'].strip(),
                'amount': to_number(expense_data['amount']),
                'category': str(expense_data['category']).strip(),
            })
            self.state.commit(expenses=[
                updated if e.id == expense_id else e for e in self.state.expenses
            ])

            audit_log(
                action="update_expense",
                record_type="expenses",
                record_id=expense_id,
                old_values=current.to_storage(),
                new_values=updated.to_storage()
            )
            return updated

        except Exception as e:
            logger.error(f"Service: Failed to update expense {expense_id}: {e}")
            raise

    def delete_expense(self, expense_id: str) -> bool:
        try:
            current = self.get_expense(expense_id)
            self.state.commit(expenses=[e for e in self.state.expenses if e.id != expense_id])

            audit_log(
                action="delete_expense",
                record_type="expenses",
                record_id=expense_id,
                old_values=current.to_storage()
            )
            return True

        except Exception as e:
            logger.error(f"Service: Failed to delete expense {expense_id}: {e}")
            raise

    def monthly_total(self, reference: Optional[datetime] = None) -> Number:
        """Total of the expenses dated in the month of reference (default: now)."""
        if reference is None:
            reference = (self.now or datetime.now)()
        return sum_amount(filter_by_period(self.state.expenses, FilterPeriod.MONTH, reference), 'amount')

    def totals_by_category(self) -> Dict[str, Number]:
        return sum_by_category(self.state.expenses)

    def list_categories(self) -> List[str]:
        """Suggested categories followed by any other category already in use."""
        categories = list(EXPENSE_CATEGORIES)
        for expense in self.state.expenses:
            if expense.category and expense.category not in categories:
                categories.append(expense.category)
        return categories
