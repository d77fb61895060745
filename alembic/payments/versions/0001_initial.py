"""initial payment audit schema

Revision ID: 0001_payments
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_payments"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("customer_id", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("customer_id"),
    )
    op.create_index("ix_customers_username", "customers", ["username"], unique=True)

    op.create_table(
        "orders",
        sa.Column("order_id", sa.String(), nullable=False),
        sa.Column("order_number", sa.String(), nullable=True),
        sa.Column("customer_id", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.customer_id"]),
        sa.PrimaryKeyConstraint("order_id"),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"])
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])

    op.create_table(
        "payment_infos",
        sa.Column("payment_info_id", sa.String(), nullable=False),
        sa.Column("order_id", sa.String(), nullable=False),
        sa.Column("reference_number", sa.String(), nullable=False),
        sa.Column("amount", sa.Numeric(19, 5), nullable=False),
        sa.Column("payment_info_type", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["order_id"], ["orders.order_id"]),
        sa.PrimaryKeyConstraint("payment_info_id"),
    )
    op.create_index("ix_payment_infos_order_id", "payment_infos", ["order_id"])
    op.create_index("ix_payment_infos_reference_number", "payment_infos", ["reference_number"], unique=True)

    op.create_table(
        "payment_logs",
        sa.Column("log_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("log_type", sa.String(), nullable=False),
        sa.Column("transaction_type", sa.String(), nullable=False),
        sa.Column("transaction_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("transaction_success", sa.Boolean(), nullable=False),
        sa.Column("user_name", sa.String(), nullable=False),
        sa.Column("exception_message", sa.String(length=255), nullable=True),
        sa.Column("customer_id", sa.String(), nullable=True),
        sa.Column("payment_info_reference_number", sa.String(), nullable=True),
        sa.Column("amount_paid", sa.Numeric(19, 5), nullable=True),
        sa.Column("payment_info_id", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.customer_id"]),
        sa.ForeignKeyConstraint(["payment_info_id"], ["payment_infos.payment_info_id"]),
        sa.PrimaryKeyConstraint("log_id"),
    )
    op.create_index("ix_payment_logs_log_type", "payment_logs", ["log_type"])
    op.create_index("ix_payment_logs_transaction_type", "payment_logs", ["transaction_type"])
    op.create_index(
        "ix_payment_logs_payment_info_reference_number", "payment_logs", ["payment_info_reference_number"]
    )
    op.create_index("ix_payment_logs_payment_info_id", "payment_logs", ["payment_info_id"])

    op.create_table(
        "payment_response_items",
        sa.Column("response_item_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_type", sa.String(), nullable=True),
        sa.Column("user_name", sa.String(), nullable=True),
        sa.Column("transaction_id", sa.String(), nullable=True),
        sa.Column("authorization_code", sa.String(), nullable=True),
        sa.Column("processor_response_code", sa.String(), nullable=True),
        sa.Column("processor_response_text", sa.String(), nullable=True),
        sa.Column("avs_code", sa.String(), nullable=True),
        sa.Column("transaction_success", sa.Boolean(), nullable=False),
        sa.Column("transaction_timestamp", sa.DateTime(timezone=True), nullable=True),
        sa.Column("amount_paid", sa.Numeric(19, 5), nullable=True),
        sa.Column("remaining_balance", sa.Numeric(19, 5), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=True),
        sa.Column("additional_fields", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("customer_id", sa.String(), nullable=True),
        sa.Column("payment_info_reference_number", sa.String(), nullable=True),
        sa.Column("payment_info_id", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.customer_id"]),
        sa.ForeignKeyConstraint(["payment_info_id"], ["payment_infos.payment_info_id"]),
        sa.PrimaryKeyConstraint("response_item_id"),
    )
    op.create_index(
        "ix_payment_response_items_transaction_type", "payment_response_items", ["transaction_type"]
    )
    op.create_index(
        "ix_payment_response_items_transaction_id", "payment_response_items", ["transaction_id"]
    )
    op.create_index(
        "ix_payment_response_items_payment_info_reference_number",
        "payment_response_items",
        ["payment_info_reference_number"],
    )
    op.create_index(
        "ix_payment_response_items_payment_info_id", "payment_response_items", ["payment_info_id"]
    )


def downgrade() -> None:
    op.drop_table("payment_response_items")
    op.drop_table("payment_logs")
    op.drop_table("payment_infos")
    op.drop_index("ix_orders_customer_id", table_name="orders")
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_customers_username", table_name="customers")
    op.drop_table("customers")
