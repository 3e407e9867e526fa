from datetime import datetime

from sqlalchemy import Column, Integer, Float, ForeignKey, DateTime, String, Text, func
from sqlalchemy.orm import relationship

from pos_ledger.models.base import Base


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_number = Column(Text, nullable=False)
    cashier_name = Column(Text, nullable=False)
    subtotal = Column(Integer, nullable=False)
    tax = Column(Integer, nullable=False)
    total = Column(Integer, nullable=False)
    discount = Column(Integer, nullable=False, default=0, server_default="0")
    paid_cash = Column(Integer, nullable=False)
    change_due = Column(Integer, nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, server_default=func.current_timestamp())

    items = relationship(
        "PaymentItem",
        back_populates="payment",
        cascade="all, delete-orphan",
        order_by="PaymentItem.id",
    )


class PaymentItem(Base):
    __tablename__ = "payment_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    payment_id = Column(Integer, ForeignKey("payments.id", ondelete="CASCADE"), nullable=False)
    # Weak reference: products can disappear without touching sold lines
    product_id = Column(Integer, nullable=True)
    name = Column(String, nullable=False)
    # Legacy integer quantity and effective unit price
    quantity = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)

    # Added by 0002_payment_item_amounts; NULL on rows written before it
    quantity_decimal = Column(Float, nullable=True)
    base_unit_price = Column(Integer, nullable=True)
    edited_unit_price = Column(Integer, nullable=True)
    line_subtotal = Column(Integer, nullable=True)
    line_discount = Column(Integer, nullable=False, default=0, server_default="0")

    payment = relationship("Payment", back_populates="items")
