from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PaymentItemIn(CamelModel):
    product_id: Optional[int] = None
    name: str
    quantity: float
    base_unit_price: int
    edited_unit_price: Optional[int] = None
    effective_unit_price: Optional[int] = None
    price: Optional[int] = None
    line_subtotal: Optional[int] = None
    line_discount: Optional[int] = None


class PaymentCreate(CamelModel):
    invoice_number: str
    cashier_name: str
    subtotal: int
    tax: int
    total: int
    discount: int = 0
    paid_cash: int
    change_due: int
    note: Optional[str] = None
    items: List[PaymentItemIn]


class PaymentItemOut(CamelModel):
    id: int
    product_id: Optional[int] = None
    name: str
    quantity: int
    price: int
    quantity_decimal: float
    base_unit_price: int
    edited_unit_price: Optional[int] = None
    effective_unit_price: int
    line_subtotal: int
    line_discount: int


class PaymentOut(CamelModel):
    id: int
    invoice_number: str
    cashier_name: str
    subtotal: int
    tax: int
    total: int
    discount: int
    paid_cash: int
    change_due: int
    note: Optional[str] = None
    created_at: datetime
    items: List[PaymentItemOut]
