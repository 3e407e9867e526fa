from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from pos_ledger.core.database import get_engine
from pos_ledger.core.schema import schema_revision


router = APIRouter()


@router.get("/health")
def health(bind: Engine = Depends(get_engine)):
    return {"status": "ok", "schema_revision": schema_revision(bind)}
