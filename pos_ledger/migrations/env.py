"""
Alembic environment for the ledger schema.

Revisions only run through ``ensure_schema``/``upgrade_schema``, which hand
their own connection over through ``config.attributes["connection"]``.
"""
from alembic import context

from pos_ledger.models import Base


config = context.config
target_metadata = Base.metadata


def run_migrations_online() -> None:
    context.configure(
        connection=config.attributes["connection"],
        target_metadata=target_metadata,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


run_migrations_online()
