# src/boutique/services/sale_service.py
"""
SALE SERVICE - Business Logic Layer
Sales, stock synchronisation and debt settlement
"""

from typing import List, Dict, Any, Optional, Sequence, Union
import logging

from boutique.core.exceptions import RecordNotFoundError
from boutique.core.logger import audit_log
from boutique.core.models import PaymentMethod, Product, Sale, SaleItem, SaleStatus
from boutique.core.state import AppState
from boutique.services.common import Clock, matches, new_record_id, today_string
from boutique.utils.calculations import clamp_stock, compute_sale_total
from boutique.utils.validators import validate_sale_data

logger = logging.getLogger(__name__)

ItemInput = Union[SaleItem, Dict[str, Any]]


class SaleService:
    """Service for sale business logic"""

    def __init__(self, state: AppState, now: Optional[Clock] = None):
        self.state = state
        self.now = now

    # ==================== QUERIES ====================

    def list_sales(self) -> List[Sale]:
        return list(self.state.sales)

    def search_sales(self, query: str) -> List[Sale]:
        """Sales whose customer name or any item name contains query."""
        return [
            sale for sale in self.state.sales
            if matches(query, sale.customer_name, *(item.product_name for item in sale.items))
        ]

    def get_sale(self, sale_id: str) -> Sale:
        for sale in self.state.sales:
            if sale.id == sale_id:
                return sale
        raise RecordNotFoundError('Sale', sale_id)

    def todays_sales(self) -> List[Sale]:
        today = today_string(self.now)
        return [sale for sale in self.state.sales if sale.date == today]

    # ==================== HELPERS ====================

    def _build_items(self, items: Sequence[ItemInput]) -> List[SaleItem]:
        """
        Line items from SaleItem objects or dicts.

        A dict may carry only product_id and quantity; name and price are then
        snapshotted from the catalogue.
        """
        catalogue = {p.id: p for p in self.state.products}
        built = []
        for item in items:
            if isinstance(item, SaleItem):
                built.append(item)
                continue
            product_id = item.get('product_id', item.get('productId'))
            name = item.get('product_name', item.get('productName'))
            price = item.get('price')
            product = catalogue.get(product_id)
            if product is not None:
                name = name if name is not None else product.name
                price = price if price is not None else product.price
            elif name is None:
                raise RecordNotFoundError('Product', product_id)
            built.append(SaleItem(
                product_id=product_id,
                product_name=name,
                quantity=item.get('quantity', 0),
                price=price if price is not None else 0,
            ))
        return built

    @staticmethod
    def _apply_stock(products: Sequence[Product], items: Sequence[SaleItem], sign: int) -> List[Product]:
        """Products with item quantities added (sign=1) or removed (sign=-1), clamped at zero."""
        moved: Dict[str, int] = {}
        for item in items:
            moved[item.product_id] = moved.get(item.product_id, 0) + item.quantity

        result = []
        for product in products:
            if product.id in moved:
                stock = clamp_stock(product.stock + sign * moved[product.id])
                product = product.model_copy(update={'stock': stock})
            result.append(product)
        return result

    # ==================== MUTATIONS ====================

    def create_sale(self, customer_name: str, items: Sequence[ItemInput],
                    payment_method: str = PaymentMethod.CASH.value) -> Sale:
        """
        Record a sale dated today.

        The total is recomputed from the items, stock is decremented and
        debt sales start unpaid.
        """
        try:
            validate_sale_data({
                'customer_name': customer_name,
                'items': items,
                'payment_method': payment_method,
            })
            method = PaymentMethod(payment_method).value
            sale_items = self._build_items(items)

            sale = Sale(
                id=new_record_id((s.id for s in self.state.sales), self.now),
                customer_name=customer_name.strip(),
                items=sale_items,
                total=compute_sale_total(sale_items),
                date=today_string(self.now),
                status=SaleStatus.COMPLETED.value,
                payment_method=method,
                is_paid=method != PaymentMethod.DEBT.value,
            )
            self.state.commit(
                products=self._apply_stock(self.state.products, sale_items, -1),
                sales=[sale] + list(self.state.sales),
            )

            audit_log(
                action="create_sale",
                record_type="sales",
                record_id=sale.id,
                new_values=sale.to_storage()
            )
            logger.info(f"Sale {sale.id} recorded: {sale.total} ({method})")
            return sale

        except Exception as e:
            logger.error(f"Service: Failed to create sale: {e}")
            raise

    def update_sale(self, sale_id: str, customer_name: str, items: Sequence[ItemInput],
                    payment_method: str) -> Sale:
        """
        Edit a sale. Stock of the previous items is restored before the new
        items are taken out. The original date is kept, and a debt that was
        already settled stays settled.
        """
        try:
            current = self.get_sale(sale_id)
            validate_sale_data({
                'customer_name': customer_name,
                'items': items,
                'payment_method': payment_method,
            })
            method = PaymentMethod(payment_method).value
            sale_items = self._build_items(items)

            if method != PaymentMethod.DEBT.value:
                is_paid = True
            elif current.payment_method == PaymentMethod.DEBT.value:
                is_paid = current.is_paid
            else:
                is_paid = False

            updated = current.model_copy(update={
                'customer_name': customer_name.strip(),
                'items': sale_items,
                'total': compute_sale_total(sale_items),
                'payment_method': method,
                'is_paid': is_paid,
            })

            products = self._apply_stock(self.state.products, current.items, 1)
            products = self._apply_stock(products, sale_items, -1)
            self.state.commit(
                products=products,
                sales=[updated if s.id == sale_id else s for s in self.state.sales],
            )

            audit_log(
                action="update_sale",
                record_type="sales",
                record_id=sale_id,
                old_values=current.to_storage(),
                new_values=updated.to_storage()
            )
            return updated

        except Exception as e:
            logger.error(f"Service: Failed to update sale {sale_id}: {e}")
            raise

    def delete_sale(self, sale_id: str) -> bool:
        """Delete a sale and put its items back in stock."""
        try:
            current = self.get_sale(sale_id)
            self.state.commit(
                products=self._apply_stock(self.state.products, current.items, 1),
                sales=[s for s in self.state.sales if s.id != sale_id],
            )

            audit_log(
                action="delete_sale",
                record_type="sales",
                record_id=sale_id,
                old_values=current.to_storage()
            )
            return True

        except Exception as e:
            logger.error(f"Service: Failed to delete sale {sale_id}: {e}")
            raise

    def settle_debt(self, sale_id: str) -> Sale:
        """Mark a sale as paid. Settling is one-way."""
        try:
            current = self.get_sale(sale_id)
            if current.is_paid:
                logger.info(f"Sale {sale_id} already paid, nothing to settle")
                return current

            updated = current.model_copy(update={'is_paid': True})
            self.state.commit(sales=[updated if s.id == sale_id else s for s in self.state.sales])

            audit_log(
                action="settle_debt",
                record_type="sales",
                record_id=sale_id,
                old_values={'isPaid': False},
                new_values={'isPaid': True}
            )
            return updated

        except Exception as e:
            logger.error(f"Service: Failed to settle debt of sale {sale_id}: {e}")
            raise
