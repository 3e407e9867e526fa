from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_ledger.core.database import get_db
from pos_ledger.schemas.catalog import CashierOut
from pos_ledger.services import catalog


router = APIRouter()


@router.get("/", response_model=List[CashierOut])
def list_cashiers(db: Session = Depends(get_db)):
    return catalog.list_cashiers(db)
