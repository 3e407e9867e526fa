import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from pos_ledger.core.config import settings
from pos_ledger.core.schema import ensure_schema


logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # payment_items cascades with its payment only when SQLite enforces FKs
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        # Sessions are handed to FastAPI's threadpool
        connect_args["check_same_thread"] = False
    engine = create_engine(url, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(settings.database_url)
SessionLocal = build_session_factory(engine)


def get_engine() -> Engine:
    return engine


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _ensure_sqlite_parent(bind: Engine) -> None:
    database = bind.url.database
    if bind.dialect.name != "sqlite" or not database or database == ":memory:":
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def init_db(bind: Engine = None) -> None:
    bind = bind or engine
    _ensure_sqlite_parent(bind)
    ensure_schema(bind)
    logger.info("Database ready at %s", bind.url.render_as_string(hide_password=True))
