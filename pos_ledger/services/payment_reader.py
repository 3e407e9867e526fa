"""
Read side of the ledger: rebuilds payment aggregates from stored rows.

Rows written before 0002_payment_item_amounts have NULL in the optional
item columns. They are filled in here, at read time, so old and new rows
come back in the same shape. Stored rows are never rewritten.
"""
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_ledger.core.errors import NotFoundError, PersistenceError
from pos_ledger.core.money import MoneyNormalizer
from pos_ledger.models.payment import Payment, PaymentItem
from pos_ledger.schemas.payment import PaymentItemOut, PaymentOut


DEFAULT_LIST_LIMIT = 200


def hydrate_item(row: PaymentItem, normalizer: MoneyNormalizer) -> PaymentItemOut:
    quantity_decimal = row.quantity_decimal if row.quantity_decimal is not None else float(row.quantity)
    base_unit_price = row.base_unit_price if row.base_unit_price is not None else row.price
    if row.line_subtotal is not None:
        line_subtotal = row.line_subtotal
    else:
        line_subtotal = normalizer.line_amount(row.price, quantity_decimal)

    return PaymentItemOut(
        id=row.id,
        product_id=row.product_id,
        name=row.name,
        quantity=row.quantity,
        price=row.price,
        quantity_decimal=quantity_decimal,
        base_unit_price=base_unit_price,
        edited_unit_price=row.edited_unit_price,
        effective_unit_price=row.price,
        line_subtotal=line_subtotal,
        line_discount=row.line_discount or 0,
    )


def hydrate_payment(db: Session, payment: Payment, normalizer: MoneyNormalizer) -> PaymentOut:
    items = (
        db.query(PaymentItem)
        .filter(PaymentItem.payment_id == payment.id)
        .order_by(PaymentItem.id.asc())
        .all()
    )
    return PaymentOut(
        id=payment.id,
        invoice_number=payment.invoice_number,
        cashier_name=payment.cashier_name,
        subtotal=payment.subtotal,
        tax=payment.tax,
        total=payment.total,
        discount=payment.discount,
        paid_cash=payment.paid_cash,
        change_due=payment.change_due,
        note=payment.note,
        created_at=payment.created_at,
        items=[hydrate_item(item, normalizer) for item in items],
    )


def load_payment(db: Session, payment_id: int, normalizer: MoneyNormalizer) -> PaymentOut:
    try:
        payment = db.query(Payment).filter(Payment.id == payment_id).first()
        if not payment:
            raise NotFoundError(f"Payment {payment_id} not found")
        return hydrate_payment(db, payment, normalizer)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Could not load payment {payment_id}: {exc}") from exc


def list_payments(
    db: Session,
    normalizer: MoneyNormalizer,
    limit: int = DEFAULT_LIST_LIMIT,
) -> List[PaymentOut]:
    """Latest payments first, at most ``limit`` of them, each with its items."""
    try:
        payments = (
            db.query(Payment)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .limit(max(0, min(limit, DEFAULT_LIST_LIMIT)))
            .all()
        )
        return [hydrate_payment(db, payment, normalizer) for payment in payments]
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Could not list payments: {exc}") from exc
