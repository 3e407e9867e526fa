from typing import Optional

from pos_ledger.schemas.payment import CamelModel


class ProductBase(CamelModel):
    name: str
    price: int = 0
    barcode: Optional[str] = None
    visible: bool = True
    quick_display: bool = False
    display_order: int = 1


class ProductOut(ProductBase):
    id: int


class CashierOut(CamelModel):
    id: int
    code: str
    name: str
    role: str
    last_active: Optional[str] = None
    require_pin: bool
    pin: Optional[str] = None
    display_order: int
    is_active: bool
