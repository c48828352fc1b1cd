# src/boutique/core/models.py
"""
DOMAIN RECORDS
Frozen pydantic models. Field aliases keep the JSON layout the mobile app stored
(customerName, paymentMethod, isPaid, logoUri ...).
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Amount = Union[int, float]

DEFAULT_SHOP_NAME = 'Ma Boutique'

EXPENSE_CATEGORIES = ('Loyer', 'Salaire', 'Livraison', 'Électricité', 'Eau', 'Autres')


class PaymentMethod(str, Enum):
    CASH = "cash"
    WAVE = "wave"
    ORANGE = "orange"
    DEBT = "debt"


class SaleStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"


class RecordModel(BaseModel):
    """Base for all stored records: immutable, accepts field names or aliases."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True, mode='json')


class Product(RecordModel):
    id: str
    name: str
    category: str = ''
    price: Amount = Field(0, ge=0)
    stock: int = 0

    @field_validator('stock', mode='before')
    def clamp_stock(cls, v):
        try:
            return max(0, int(v))
        except (TypeError, ValueError):
            return 0


class SaleItem(RecordModel):
    product_id: str = Field(alias='productId')
    product_name: str = Field(alias='productName')
    quantity: int = Field(gt=0)
    price: Amount = Field(0, ge=0)

    @property
    def line_total(self) -> Amount:
        return self.quantity * self.price


class Sale(RecordModel):
    id: str
    customer_name: str = Field(alias='customerName')
    items: List[SaleItem] = Field(default_factory=list)
    total: Amount = 0
    date: str = ''
    status: str = SaleStatus.COMPLETED.value
    payment_method: str = Field(PaymentMethod.CASH.value, alias='paymentMethod')
    is_paid: bool = Field(True, alias='isPaid')

    @model_validator(mode='before')
    def default_paid_flag(cls, data):
        # A record without a paid flag is paid unless it is a debt
        if isinstance(data, dict) and 'is_paid' not in data and 'isPaid' not in data:
            method = data.get('payment_method', data.get('paymentMethod', PaymentMethod.CASH.value))
            data = {**data, 'isPaid': method != PaymentMethod.DEBT.value}
        return data

    @property
    def is_unpaid_debt(self) -> bool:
        return self.payment_method == PaymentMethod.DEBT.value and not self.is_paid


class Expense(RecordModel):
    id: str
    description: str
    amount: Amount = Field(0, ge=0)
    category: str = ''
    date: str = ''


class ShopSettings(RecordModel):
    name: str = DEFAULT_SHOP_NAME
    logo_uri: Optional[str] = Field(None, alias='logoUri')
    phone: Optional[str] = ''
    address: Optional[str] = ''
    email: Optional[str] = ''

    @property
    def has_logo(self) -> bool:
        return bool(self.logo_uri) and self.logo_uri.startswith('data:image/')
