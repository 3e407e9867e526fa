import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pos_ledger.core.config import settings
from pos_ledger.core.database import init_db
from pos_ledger.core.error_handlers import register_error_handlers
from pos_ledger.routes.cashiers import router as cashiers_router
from pos_ledger.routes.health import router as health_router
from pos_ledger.routes.payments import router as payments_router
from pos_ledger.routes.products import router as products_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app(run_init_db: bool = True) -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())
    app = FastAPI(
        title="POS Ledger API",
        version="0.1.0",
        lifespan=lifespan if run_init_db else None,
    )

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(payments_router, prefix="/payments", tags=["payments"])
    app.include_router(products_router, prefix="/products", tags=["products"])
    app.include_router(cashiers_router, prefix="/cashiers", tags=["cashiers"])

    return app


app = create_app()
