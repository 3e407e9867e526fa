"""
Write side of the ledger: creates a payment header and its lines atomically.

Payments are append-only. There is no update or delete path.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pos_ledger.core.errors import MissingField, PersistenceError, ValidationError
from pos_ledger.core.money import MoneyNormalizer
from pos_ledger.models.payment import Payment, PaymentItem
from pos_ledger.schemas.payment import PaymentOut
from pos_ledger.services.payment_items import (
    NormalizedPaymentItem,
    item_to_dict,
    normalize_payment_items,
    parse_amount,
)
from pos_ledger.services.payment_reader import load_payment


logger = logging.getLogger(__name__)


def normalize_note(note: Optional[str]) -> Optional[str]:
    if note is None:
        return None
    cleaned = note.strip()
    return cleaned or None


def _required_text(payload: Mapping[str, Any], field: str) -> str:
    cleaned = (payload.get(field) or "").strip()
    if not cleaned:
        raise MissingField(field, f"{field.replace('_', ' ').capitalize()} is required")
    return cleaned


HEADER_AMOUNTS = ("subtotal", "tax", "total", "paid_cash", "change_due")


def _header_amounts(payload: Mapping[str, Any]) -> Dict[str, int]:
    amounts = {}
    for field in HEADER_AMOUNTS:
        if payload.get(field) is None:
            raise MissingField(field, f"{field.replace('_', ' ').capitalize()} is required")
        amounts[field] = parse_amount(payload[field], field)
    discount = payload.get("discount")
    amounts["discount"] = 0 if discount is None else parse_amount(discount, "discount")
    return amounts


def build_item_row(payment_id: int, item: NormalizedPaymentItem) -> PaymentItem:
    return PaymentItem(payment_id=payment_id, **item_to_dict(item))


def create_payment(
    db: Session,
    payload: Mapping[str, Any],
    normalizer: MoneyNormalizer,
) -> PaymentOut:
    """
    Persist a payment and all of its items in one transaction.

    Args:
        db: Session used for both the write and the read-back
        payload: invoice_number, cashier_name, subtotal, tax, total, discount,
            paid_cash, change_due, optional note and a list of raw items
        normalizer: Rounding policy for derived line subtotals

    Returns:
        The payment as stored, re-read from the database

    Raises:
        ValidationError: Bad input; nothing was written
        PersistenceError: Storage failure; the transaction was rolled back
    """
    try:
        invoice_number = _required_text(payload, "invoice_number")
        cashier_name = _required_text(payload, "cashier_name")
        amounts = _header_amounts(payload)
        note = normalize_note(payload.get("note"))
        items = normalize_payment_items(payload.get("items") or [], normalizer)
    except ValidationError as exc:
        logger.warning("Rejected payment %r: %s", payload.get("invoice_number"), exc.message)
        raise

    try:
        payment = Payment(
            invoice_number=invoice_number,
            cashier_name=cashier_name,
            **amounts,
            note=note,
        )
        db.add(payment)
        db.flush()
        payment_id = payment.id

        for item in items:
            db.add(build_item_row(payment_id, item))

        db.commit()
    except (SQLAlchemyError, OverflowError) as exc:
        db.rollback()
        logger.error("Payment %s rolled back: %s", invoice_number, exc)
        raise PersistenceError(f"Could not store payment {invoice_number}: {exc}") from exc
    except Exception:
        db.rollback()
        logger.error("Payment %s rolled back", invoice_number)
        raise

    logger.info("Created payment %s (%s) with %d items", payment_id, invoice_number, len(items))
    return load_payment(db, payment_id, normalizer)
