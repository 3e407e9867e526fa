"""Decimal quantity and per-line amounts on payment_items.

Rows that predate this revision keep NULL in the new columns (line_discount
gets its server default) and are backfilled when read.
"""
from alembic import op
import sqlalchemy as sa


revision = "0002_payment_item_amounts"
down_revision = "0001_baseline"
branch_labels = None
depends_on = None


OPTIONAL_COLUMNS = (
    ("quantity_decimal", lambda: sa.Column("quantity_decimal", sa.Float(), nullable=True)),
    ("base_unit_price", lambda: sa.Column("base_unit_price", sa.Integer(), nullable=True)),
    ("edited_unit_price", lambda: sa.Column("edited_unit_price", sa.Integer(), nullable=True)),
    ("line_subtotal", lambda: sa.Column("line_subtotal", sa.Integer(), nullable=True)),
    ("line_discount", lambda: sa.Column("line_discount", sa.Integer(), nullable=False, server_default="0")),
)


def upgrade() -> None:
    present = {
        col["name"].lower()
        for col in sa.inspect(op.get_bind()).get_columns("payment_items")
    }
    for name, build_column in OPTIONAL_COLUMNS:
        if name not in present:
            # Plain ALTER TABLE ADD COLUMN; existing rows are left untouched
            op.add_column("payment_items", build_column())


def downgrade() -> None:
    raise NotImplementedError("The ledger schema only evolves forward")
