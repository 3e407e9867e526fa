from .base import Base
from .product import Product
from .cashier import Cashier
from .payment import Payment, PaymentItem

__all__ = ["Base", "Product", "Cashier", "Payment", "PaymentItem"]
