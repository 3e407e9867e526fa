from typing import List
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_ledger.core.database import get_db
from pos_ledger.schemas.catalog import ProductBase, ProductOut
from pos_ledger.services import catalog


router = APIRouter()


@router.get("/", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    logging.getLogger(__name__).info("list_products")
    return catalog.list_products(db)


@router.post("/", response_model=ProductOut)
def create_product(data: ProductBase, db: Session = Depends(get_db)):
    return catalog.create_product(db, data)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, data: ProductBase, db: Session = Depends(get_db)):
    return catalog.update_product(db, product_id, data)
