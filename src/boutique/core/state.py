# src/boutique/core/state.py
"""
APPLICATION STATE
Owns the in-memory collections. Loaded once on start, saved on every commit.
"""

from typing import List, Optional, Sequence
import logging

from boutique.core.models import Expense, Product, Sale, ShopSettings
from boutique.repositories.store_repo import StoreRepository

logger = logging.getLogger(__name__)


class AppState:
    """
    Products, sales, expenses and settings of the shop.

    Collections are exposed as tuples; callers replace them through commit(),
    which persists the keys that changed.
    """

    def __init__(self, repo: StoreRepository):
        self.repo = repo
        self._products: List[Product] = []
        self._sales: List[Sale] = []
        self._expenses: List[Expense] = []
        self._settings = ShopSettings()
        self.loaded = False

    @property
    def products(self):
        return tuple(self._products)

    @property
    def sales(self):
        return tuple(self._sales)

    @property
    def expenses(self):
        return tuple(self._expenses)

    @property
    def settings(self) -> ShopSettings:
        return self._settings

    def load(self):
        """Load every collection from the repository."""
        self._products = self.repo.load_products()
        self._sales = self.repo.load_sales()
        self._expenses = self.repo.load_expenses()
        self._settings = self.repo.load_settings()
        self.loaded = True
        logger.info(
            f"State loaded: {len(self._products)} products, {len(self._sales)} sales, "
            f"{len(self._expenses)} expenses"
        )

    def commit(
        self,
        products: Optional[Sequence[Product]] = None,
        sales: Optional[Sequence[Sale]] = None,
        expenses: Optional[Sequence[Expense]] = None,
        settings: Optional[ShopSettings] = None
    ):
        """
        Replace the given collections and save them in one transaction.

        Memory is only updated once the save succeeded.
        """
        new_products = list(products) if products is not None else None
        new_sales = list(sales) if sales is not None else None
        new_expenses = list(expenses) if expenses is not None else None

        self.repo.save_changes(
            products=new_products,
            sales=new_sales,
            expenses=new_expenses,
            settings=settings
        )

        if new_products is not None:
            self._products = new_products
        if new_sales is not None:
            self._sales = new_sales
        if new_expenses is not None:
            self._expenses = new_expenses
        if settings is not None:
            self._settings = settings

    def reset(self):
        """Drop all stored data and restore default settings."""
        self.repo.clear_all()
        self._products = []
        self._sales = []
        self._expenses = []
        self._settings = ShopSettings()
        self.repo.save_settings(self._settings)
        logger.info("Application state reset")
