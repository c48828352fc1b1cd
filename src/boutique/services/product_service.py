# src/boutique/services/product_service.py
"""
PRODUCT SERVICE - Business Logic Layer
Handles the product catalogue and stock levels
"""

from typing import List, Dict, Any, Optional
import logging

from boutique.core.exceptions import RecordNotFoundError
from boutique.core.logger import audit_log
from boutique.core.models import Product
from boutique.core.state import AppState
from boutique.services.common import Clock, matches, new_record_id
from boutique.utils.calculations import clamp_stock, to_number
from boutique.utils.validators import validate_product_data

logger = logging.getLogger(__name__)


class ProductService:
    """Service for product business logic"""

    def __init__(self, state: AppState, now: Optional[Clock] = None):
        self.state = state
        self.now = now

    def list_products(self) -> List[Product]:
        return list(self.state.products)

    def search_products(self, query: str) -> List[Product]:
        """Products whose name or category contains query."""
        return [p for p in self.state.products if matches(query, p.name, p.category)]

    def get_product(self, product_id: str) -> Product:
        for product in self.state.products:
            if product.id == product_id:
                return product
        raise RecordNotFoundError('Product', product_id)

    def create_product(self, product_data: Dict[str, Any]) -> Product:
        """Create product with validation. New products go first in the list."""
        try:
            validate_product_data(product_data)

            product = Product(
                id=new_record_id((p.id for p in self.state.products), self.now),
                name=product_data['name'].strip(),
                category=str(product_data['category']).strip(),
                price=to_number(product_data['price']),
                stock=to_number(product_data['stock']),
            )
            self.state.commit(products=[product] + list(self.state.products))

            audit_log(
                action="create_product",
                record_type="products",
                record_id=product.id,
                new_values=product.to_storage()
            )
            return product

        except Exception as e:
            logger.error(f"Service: Failed to create product: {e}")
            raise

    def update_product(self, product_id: str, product_data: Dict[str, Any]) -> Product:
        """Update product with validation."""
        try:
            current = self.get_product(product_id)
            validate_product_data(product_data)

            updated = current.model_copy(update={
                'name': product_data['name'].strip(),
                'category': str(product_data['category']).strip(),
                'price': to_number(product_data['price']),
                'stock': clamp_stock(to_number(product_data['stock'])),
            })
            self.state.commit(products=[
                updated if p.id == product_id else p for p in self.state.products
            ])

            audit_log(
                action="update_product",
                record_type="products",
                record_id=product_id,
                old_values=current.to_storage(),
                new_values=updated.to_storage()
            )
            return updated

        except Exception as e:
            logger.error(f"Service: Failed to update product {product_id}: {e}")
            raise

    def delete_product(self, product_id: str) -> bool:
        """Remove a product. Sales referencing it keep their line-item snapshot."""
        try:
            current = self.get_product(product_id)
            self.state.commit(products=[p for p in self.state.products if p.id != product_id])

            audit_log(
                action="delete_product",
                record_type="products",
                record_id=product_id,
                old_values=current.to_storage()
            )
            return True

        except Exception as e:
            logger.error(f"Service: Failed to delete product {product_id}: {e}")
            raise

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Add delta (negative to remove) to a product's stock, never below zero."""
        try:
            current = self.get_product(product_id)
            updated = current.model_copy(update={'stock': clamp_stock(current.stock + int(delta))})
            self.state.commit(products=[
                updated if p.id == product_id else p for p in self.state.products
            ])

            audit_log(
                action="adjust_stock",
                record_type="products",
                record_id=product_id,
                old_values={'stock': current.stock},
                new_values={'stock': updated.stock}
            )
            return updated

        except Exception as e:
            logger.error(f"Service: Failed to adjust stock of {product_id}: {e}")
            raise
