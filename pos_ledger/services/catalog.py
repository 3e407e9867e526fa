"""
Products and cashiers: plain lookups and writes on the shared database.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_ledger.core.errors import MissingField, NotFoundError, PersistenceError
from pos_ledger.models.cashier import Cashier
from pos_ledger.models.product import Product
from pos_ledger.schemas.catalog import ProductBase


logger = logging.getLogger(__name__)


def normalize_barcode(barcode: Optional[str]) -> Optional[str]:
    if barcode is None:
        return None
    cleaned = barcode.strip()
    return cleaned or None


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise MissingField("name", "Product name is required")
    return cleaned


def list_products(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.display_order.asc(), Product.id.asc()).all()


def list_cashiers(db: Session) -> List[Cashier]:
    """Active cashiers only, in display order."""
    return (
        db.query(Cashier)
        .filter(Cashier.is_active == True)
        .order_by(Cashier.display_order.asc(), Cashier.name.asc())
        .all()
    )


def create_product(db: Session, data: ProductBase) -> Product:
    product = Product(
        name=_clean_name(data.name),
        price=data.price,
        barcode=normalize_barcode(data.barcode),
        visible=data.visible,
        quick_display=data.quick_display,
        display_order=data.display_order,
    )
    try:
        db.add(product)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Could not create product {data.name!r}: {exc}") from exc
    db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


def update_product(db: Session, product_id: int, data: ProductBase) -> Product:
    values = {
        Product.name: _clean_name(data.name),
        Product.price: data.price,
        Product.barcode: normalize_barcode(data.barcode),
        Product.visible: data.visible,
        Product.quick_display: data.quick_display,
        Product.display_order: data.display_order,
    }
    try:
        affected = (
            db.query(Product)
            .filter(Product.id == product_id)
            .update(values, synchronize_session=False)
        )
        if affected == 0:
            db.rollback()
            raise NotFoundError(f"Product {product_id} not found")
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError(f"Could not update product {product_id}: {exc}") from exc
    logger.info("Updated product %s", product_id)
    return db.query(Product).filter(Product.id == product_id).one()
