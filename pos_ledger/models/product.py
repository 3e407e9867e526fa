from datetime import datetime

from sqlalchemy import Column, Integer, Text, Boolean, DateTime, func

from pos_ledger.models.base import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    barcode = Column(Text, nullable=True)
    visible = Column(Boolean, nullable=False, default=True, server_default="1")
    quick_display = Column(Boolean, nullable=False, default=False, server_default="0")
    display_order = Column(Integer, nullable=False, default=1, server_default="1")
    created_at = Column(DateTime, nullable=True, default=datetime.utcnow, server_default=func.current_timestamp())
