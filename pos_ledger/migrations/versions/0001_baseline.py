"""Baseline tables: products, payments, payment_items (legacy columns), cashiers.

Databases copied from the bundled template already carry these tables
without an alembic_version row, so each table is only created when absent.
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_baseline"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    existing = set(sa.inspect(op.get_bind()).get_table_names())

    if "products" not in existing:
        op.create_table(
            "products",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("price", sa.Integer(), nullable=False),
            sa.Column("barcode", sa.Text(), nullable=True),
            sa.Column("visible", sa.Integer(), nullable=False, server_default="1"),
            sa.Column("quick_display", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("display_order", sa.Integer(), nullable=False, server_default="1"),
            sa.Column("created_at", sa.Text(), nullable=True, server_default=sa.func.current_timestamp()),
            sqlite_autoincrement=True,
        )

    if "payments" not in existing:
        op.create_table(
            "payments",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("invoice_number", sa.Text(), nullable=False),
            sa.Column("cashier_name", sa.Text(), nullable=False),
            sa.Column("subtotal", sa.Integer(), nullable=False),
            sa.Column("tax", sa.Integer(), nullable=False),
            sa.Column("total", sa.Integer(), nullable=False),
            sa.Column("discount", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("paid_cash", sa.Integer(), nullable=False),
            sa.Column("change_due", sa.Integer(), nullable=False),
            sa.Column("note", sa.Text(), nullable=True),
            sa.Column("created_at", sa.Text(), nullable=False, server_default=sa.func.current_timestamp()),
            sqlite_autoincrement=True,
        )

    if "payment_items" not in existing:
        op.create_table(
            "payment_items",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("payment_id", sa.Integer(), nullable=False),
            sa.Column("product_id", sa.Integer(), nullable=True),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("quantity", sa.Integer(), nullable=False),
            sa.Column("price", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["payment_id"], ["payments.id"], ondelete="CASCADE"),
            sqlite_autoincrement=True,
        )

    if "cashiers" not in existing:
        op.create_table(
            "cashiers",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("code", sa.Text(), nullable=False, unique=True),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("role", sa.Text(), nullable=False),
            sa.Column("last_active", sa.Text(), nullable=True),
            sa.Column("require_pin", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("pin", sa.Text(), nullable=True),
            sa.Column("display_order", sa.Integer(), nullable=False, server_default="1"),
            sa.Column("is_active", sa.Integer(), nullable=False, server_default="1"),
            sa.Column("created_at", sa.Text(), nullable=True, server_default=sa.func.current_timestamp()),
            sqlite_autoincrement=True,
        )


def downgrade() -> None:
    raise NotImplementedError("The ledger schema only evolves forward")
