from datetime import datetime, timedelta

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from pos_ledger.core.errors import (
    EmptyItemList,
    InvalidAmount,
    InvalidQuantity,
    MissingField,
    NegativeBasePrice,
    NegativeDiscount,
    NotFoundError,
    PersistenceError,
)
from pos_ledger.models.payment import Payment
from pos_ledger.services import payment_ledger
from pos_ledger.services.payment_ledger import create_payment
from pos_ledger.services.payment_reader import list_payments, load_payment


def _row_counts(session_factory):
    with session_factory() as session:
        payments = session.execute(text("SELECT COUNT(*) FROM payments")).scalar_one()
        items = session.execute(text("SELECT COUNT(*) FROM payment_items")).scalar_one()
    return payments, items


def test_coffee_example_is_stored_canonically(db, normalizer, make_payload, session_factory):
    payment = create_payment(db, make_payload(), normalizer)

    assert payment.invoice_number == "INV-1"
    assert payment.cashier_name == "Linh"
    assert (payment.subtotal, payment.tax, payment.total) == (100, 10, 110)
    assert (payment.paid_cash, payment.change_due, payment.discount) == (200, 90, 0)
    assert payment.note is None
    assert len(payment.items) == 1
    item = payment.items[0]
    assert item.effective_unit_price == 50
    assert item.price == 50
    assert item.line_subtotal == 100
    assert item.quantity == 2
    assert item.quantity_decimal == 2.0
    assert _row_counts(session_factory) == (1, 1)


def test_response_reflects_stored_values_not_caller_echo(db, normalizer, make_payload):
    payload = make_payload(
        invoice_number="  INV-2  ",
        cashier_name=" Hoàng ",
        note="   ",
        items=[{"name": " Tea ", "quantity": 0.4, "base_unit_price": 25, "edited_unit_price": -1}],
    )
    payment = create_payment(db, payload, normalizer)

    assert payment.invoice_number == "INV-2"
    assert payment.cashier_name == "Hoàng"
    assert payment.note is None
    item = payment.items[0]
    assert item.name == "Tea"
    assert item.quantity == 1
    assert item.quantity_decimal == pytest.approx(0.4)
    assert item.edited_unit_price is None
    assert item.line_subtotal == 10


def test_note_is_trimmed(db, normalizer, make_payload):
    payment = create_payment(db, make_payload(note="  table 4 "), normalizer)
    assert payment.note == "table 4"


def test_items_keep_insertion_order(db, normalizer, make_payload):
    items = [{"name": name, "quantity": 1, "base_unit_price": 10} for name in ("b", "a", "c")]
    payment = create_payment(db, make_payload(items=items), normalizer)
    assert [item.name for item in payment.items] == ["b", "a", "c"]
    assert [item.id for item in payment.items] == sorted(item.id for item in payment.items)


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"items": []}, EmptyItemList),
        ({"items": [{"name": "x", "quantity": 0, "base_unit_price": 1}]}, InvalidQuantity),
        ({"items": [{"name": "x", "quantity": 1, "base_unit_price": -1}]}, NegativeBasePrice),
        ({"items": [{"name": "x", "quantity": 1, "base_unit_price": 1, "line_discount": -1}]}, NegativeDiscount),
        ({"invoice_number": "   "}, MissingField),
        ({"cashier_name": ""}, MissingField),
        ({"total": None}, MissingField),
        ({"paid_cash": None}, MissingField),
        ({"subtotal": 99.5}, InvalidAmount),
        ({"change_due": 2 ** 63}, InvalidAmount),
        ({"items": [{"name": "x", "quantity": 1e30, "base_unit_price": 1}]}, InvalidQuantity),
        ({"items": [{"name": "x", "quantity": 1, "base_unit_price": 1, "effective_unit_price": -0.5}]}, InvalidAmount),
        ({"items": [{"name": "x", "quantity": 1}]}, MissingField),
    ],
)
def test_invalid_payloads_write_nothing(db, normalizer, make_payload, session_factory, overrides, error):
    with pytest.raises(error):
        create_payment(db, make_payload(**overrides), normalizer)
    assert _row_counts(session_factory) == (0, 0)


def test_one_bad_item_rejects_the_whole_payment(db, normalizer, make_payload, session_factory):
    items = [
        {"name": "good", "quantity": 1, "base_unit_price": 10},
        {"name": "bad", "quantity": -2, "base_unit_price": 10},
    ]
    with pytest.raises(InvalidQuantity):
        create_payment(db, make_payload(items=items), normalizer)
    assert _row_counts(session_factory) == (0, 0)


def test_failure_mid_transaction_leaves_no_rows(db, normalizer, make_payload, session_factory, monkeypatch):
    original = payment_ledger.build_item_row
    calls = []

    def flaky_build(payment_id, item):
        calls.append(payment_id)
        if len(calls) == 2:
            raise OperationalError("INSERT INTO payment_items", {}, Exception("disk I/O error"))
        return original(payment_id, item)

    monkeypatch.setattr(payment_ledger, "build_item_row", flaky_build)
    items = [{"name": f"item {n}", "quantity": 1, "base_unit_price": 10} for n in range(3)]

    with pytest.raises(PersistenceError):
        create_payment(db, make_payload(items=items), normalizer)

    assert _row_counts(session_factory) == (0, 0)


def test_unexpected_error_also_rolls_back(db, normalizer, make_payload, session_factory, monkeypatch):
    def broken_build(payment_id, item):
        raise RuntimeError("boom")

    monkeypatch.setattr(payment_ledger, "build_item_row", broken_build)
    with pytest.raises(RuntimeError):
        create_payment(db, make_payload(), normalizer)
    assert _row_counts(session_factory) == (0, 0)


def test_session_is_usable_after_rollback(db, normalizer, make_payload):
    with pytest.raises(EmptyItemList):
        create_payment(db, make_payload(items=[]), normalizer)
    payment = create_payment(db, make_payload(), normalizer)
    assert load_payment(db, payment.id, normalizer).id == payment.id


def test_load_missing_payment_raises_not_found(db, normalizer):
    with pytest.raises(NotFoundError):
        load_payment(db, 999, normalizer)


def test_list_is_newest_first(db, normalizer, make_payload):
    first = create_payment(db, make_payload(invoice_number="A"), normalizer)
    second = create_payment(db, make_payload(invoice_number="B"), normalizer)
    db.query(Payment).filter(Payment.id == first.id).update(
        {Payment.created_at: datetime.utcnow() - timedelta(days=1)}
    )
    db.commit()

    listed = list_payments(db, normalizer)

    assert [p.invoice_number for p in listed] == ["B", "A"]
    assert listed[0].id == second.id
    assert listed[0].items and listed[1].items


def test_list_is_capped_at_200(db, normalizer, session_factory):
    with session_factory() as session:
        for n in range(205):
            session.add(Payment(
                invoice_number=f"INV-{n}", cashier_name="An", subtotal=0, tax=0,
                total=0, paid_cash=0, change_due=0,
            ))
        session.commit()

    assert len(list_payments(db, normalizer)) == 200
    assert len(list_payments(db, normalizer, limit=5000)) == 200
    assert len(list_payments(db, normalizer, limit=3)) == 3
    assert list_payments(db, normalizer, limit=0) == []
    assert list_payments(db, normalizer, limit=-1) == []


def test_cascade_removes_items_with_their_payment(db, normalizer, make_payload, session_factory):
    payment = create_payment(db, make_payload(), normalizer)
    with session_factory() as session:
        session.execute(text("DELETE FROM payments WHERE id = :id"), {"id": payment.id})
        session.commit()
    assert _row_counts(session_factory) == (0, 0)


def test_missing_header_amount_names_the_field(db, normalizer, make_payload):
    payload = make_payload()
    del payload["tax"]
    with pytest.raises(MissingField) as exc_info:
        create_payment(db, payload, normalizer)
    assert exc_info.value.field == "tax"


def test_discount_defaults_to_zero(db, normalizer, make_payload):
    payload = make_payload()
    del payload["discount"]
    assert create_payment(db, payload, normalizer).discount == 0


def test_integer_overflow_during_write_rolls_back(db, normalizer, make_payload, session_factory, monkeypatch):
    def overflowing_build(payment_id, item):
        raise OverflowError("Python int too large to convert to SQLite INTEGER")

    monkeypatch.setattr(payment_ledger, "build_item_row", overflowing_build)
    with pytest.raises(PersistenceError):
        create_payment(db, make_payload(), normalizer)
    assert _row_counts(session_factory) == (0, 0)
