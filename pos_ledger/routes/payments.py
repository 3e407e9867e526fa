from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_ledger.core.database import get_db
from pos_ledger.core.deps import get_money_normalizer, get_payments_page_size
from pos_ledger.core.money import MoneyNormalizer
from pos_ledger.schemas.payment import PaymentCreate, PaymentOut
from pos_ledger.services import payment_ledger, payment_reader


router = APIRouter()


@router.get("/", response_model=List[PaymentOut])
def list_payments(
    db: Session = Depends(get_db),
    normalizer: MoneyNormalizer = Depends(get_money_normalizer),
    limit: int = Depends(get_payments_page_size),
):
    return payment_reader.list_payments(db, normalizer, limit=limit)


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    normalizer: MoneyNormalizer = Depends(get_money_normalizer),
):
    return payment_reader.load_payment(db, payment_id, normalizer)


@router.post("/", response_model=PaymentOut)
def create_payment(
    data: PaymentCreate,
    db: Session = Depends(get_db),
    normalizer: MoneyNormalizer = Depends(get_money_normalizer),
):
    return payment_ledger.create_payment(db, data.model_dump(), normalizer)
