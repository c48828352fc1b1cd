# src/boutique/repositories/store_repo.py
"""
STORE REPOSITORY - Data Access Layer
Maps the JSON blobs of the key-value storage to domain records.
"""

from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar
import logging

from pydantic import ValidationError

from boutique.core.models import Expense, Product, RecordModel, Sale, ShopSettings
from boutique.core.storage import StorageManager

logger = logging.getLogger(__name__)

R = TypeVar('R', bound=RecordModel)


class StoreRepository:
    """Repository for products, sales, expenses and shop settings"""

    def __init__(self, storage: StorageManager):
        self.storage = storage

    # ==================== HELPERS ====================

    def _load_records(self, key: str, model: Type[R]) -> List[R]:
        raw = self.storage.load(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning(f"Stored '{key}' is not a list, ignoring it")
            return []

        records = []
        for index, entry in enumerate(raw):
            try:
                records.append(model.model_validate(entry))
            except ValidationError as e:
                # Malformed entries are dropped rather than blocking the whole load
                logger.warning(f"Skipping malformed {key} entry #{index}: {e.error_count()} error(s)")
        return records

    # ==================== COLLECTIONS ====================

    def load_products(self) -> List[Product]:
        return self._load_records('products', Product)

    def load_sales(self) -> List[Sale]:
        return self._load_records('sales', Sale)

    def load_expenses(self) -> List[Expense]:
        return self._load_records('expenses', Expense)

    # ==================== SETTINGS ====================

    def load_settings(self) -> ShopSettings:
        raw: Any = self.storage.load('settings')
        if not raw:
            return ShopSettings()
        try:
            return ShopSettings.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Stored settings are malformed, using defaults: {e.error_count()} error(s)")
            return ShopSettings()

    def save_settings(self, settings: ShopSettings):
        self.storage.save('settings', settings.to_storage())

    def save_changes(
        self,
        products: Optional[Iterable[Product]] = None,
        sales: Optional[Iterable[Sale]] = None,
        expenses: Optional[Iterable[Expense]] = None,
        settings: Optional[ShopSettings] = None
    ):
        """Save the given collections together, in one storage transaction."""
        values: Dict[str, Any] = {}
        if products is not None:
            values['products'] = [record.to_storage() for record in products]
        if sales is not None:
            values['sales'] = [record.to_storage() for record in sales]
        if expenses is not None:
            values['expenses'] = [record.to_storage() for record in expenses]
        if settings is not None:
            values['settings'] = settings.to_storage()
        if values:
            self.storage.save_many(values)

    def clear_all(self):
        self.storage.clear()
