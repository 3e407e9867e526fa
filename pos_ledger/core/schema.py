"""
Schema evolution for the ledger database.

The schema is an explicit, numbered list of alembic revisions under
``pos_ledger/migrations/versions``. ``ensure_schema`` upgrades to head and
then seeds reference cashiers. Each revision checks what is already there
before touching it, so the call is safe on every connection open, on a
database provisioned from a template, and on one left half-migrated by an
earlier failure.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from alembic import command
from alembic.config import Config
from alembic.migration import MigrationContext
from alembic.util import CommandError
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from pos_ledger.core.errors import SchemaError
from pos_ledger.services.seed import SeedProvider, default_cashier_seed, seed_cashiers_if_empty


logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"
HEAD = "head"


def build_alembic_config(connection: Connection) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.attributes["connection"] = connection
    return cfg


def schema_revision(bind: Union[Engine, Connection]) -> Optional[str]:
    """Revision currently recorded in ``alembic_version`` (None if never migrated)."""
    try:
        if isinstance(bind, Engine):
            with bind.connect() as connection:
                return MigrationContext.configure(connection).get_current_revision()
        return MigrationContext.configure(bind).get_current_revision()
    except SQLAlchemyError as exc:
        raise SchemaError(f"Could not read schema revision: {exc}") from exc


def upgrade_schema(engine: Engine, revision: str = HEAD) -> None:
    """Apply revisions up to ``revision`` inside one transaction."""
    try:
        with engine.begin() as connection:
            before = MigrationContext.configure(connection).get_current_revision()
            command.upgrade(build_alembic_config(connection), revision)
            after = MigrationContext.configure(connection).get_current_revision()
    except (SQLAlchemyError, CommandError) as exc:
        raise SchemaError(f"Schema migration to {revision} failed: {exc}") from exc
    if before != after:
        logger.info("Schema migrated from %s to %s", before or "<empty>", after)


def ensure_schema(engine: Engine, seed_provider: SeedProvider = default_cashier_seed) -> None:
    """
    Converge the database to the current schema and seed reference data.

    Args:
        engine: Engine bound to an already provisioned database file
        seed_provider: Callable returning the cashier rows to insert when the
            cashiers table is empty

    Raises:
        SchemaError: If any DDL, introspection or seeding statement fails
    """
    upgrade_schema(engine, HEAD)
    try:
        with engine.begin() as connection:
            inserted = seed_cashiers_if_empty(connection, seed_provider)
    except SQLAlchemyError as exc:
        raise SchemaError(f"Seeding cashiers failed: {exc}") from exc
    if inserted:
        logger.info("Seeded %d default cashiers", inserted)
