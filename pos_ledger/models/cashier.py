from datetime import datetime

from sqlalchemy import Column, Integer, Text, Boolean, DateTime, func

from pos_ledger.models.base import Base


class Cashier(Base):
    __tablename__ = "cashiers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
    last_active = Column(Text, nullable=True)  # free text, e.g. "08:05" or "Hôm qua"
    require_pin = Column(Boolean, nullable=False, default=False, server_default="0")
    pin = Column(Text, nullable=True)
    display_order = Column(Integer, nullable=False, default=1, server_default="1")
    is_active = Column(Boolean, nullable=False, default=True, server_default="1")
    created_at = Column(DateTime, nullable=True, default=datetime.utcnow, server_default=func.current_timestamp())
