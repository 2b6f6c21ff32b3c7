"""initial_portfolio_schema

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9a1c2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LIVE = sa.text("deleted_at IS NULL")


def _money() -> sa.Numeric:
    return sa.Numeric(14, 2)


def _timestamps(soft_delete: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]
    if soft_delete:
        columns.append(sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True))
    return columns


def _timestamp_indexes(table: str, soft_delete: bool = True) -> None:
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])
    if soft_delete:
        op.create_index(f"ix_{table}_deleted_at", table, ["deleted_at"])


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=False),
        sa.Column("language", sa.String(5), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    _timestamp_indexes("users")
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("uq_users_email_live", "users", ["email"], unique=True, postgresql_where=LIVE)

    op.create_table(
        "properties",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("address", sa.String(200), nullable=False),
        sa.Column("property_type", sa.String(20), nullable=False),
        sa.Column("purchase_price", _money(), nullable=False),
        sa.Column("purchase_date", sa.Date(), nullable=False),
        sa.Column("current_valuation", _money(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    _timestamp_indexes("properties")
    op.create_index("ix_properties_user_id", "properties", ["user_id"])

    op.create_table(
        "owners",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("owner_kind", sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    _timestamp_indexes("owners")
    op.create_index("ix_owners_user_id", "owners", ["user_id"])

    op.create_table(
        "loans",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("property_id", sa.String(), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("lender_name", sa.String(100), nullable=False),
        sa.Column("branch_name", sa.String(100), nullable=True),
        sa.Column("loan_type", sa.String(20), nullable=False),
        sa.Column("principal_amount", _money(), nullable=False),
        sa.Column("current_balance", _money(), nullable=False),
        sa.Column("interest_rate", sa.Numeric(6, 3), nullable=False),
        sa.Column("loan_term_months", sa.Integer(), nullable=False),
        sa.Column("monthly_payment", _money(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["owners.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "property_id IS NOT NULL OR owner_id IS NOT NULL", name="ck_loans_has_parent"
        ),
    )
    _timestamp_indexes("loans")
    op.create_index("ix_loans_property_id", "loans", ["property_id"])
    op.create_index("ix_loans_owner_id", "loans", ["owner_id"])

    op.create_table(
        "loan_repayments",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("loan_id", sa.String(), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("amount", _money(), nullable=False),
        sa.Column("principal_amount", _money(), nullable=False),
        sa.Column("interest_amount", _money(), nullable=False),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("reference_number", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(soft_delete=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["loan_id"], ["loans.id"], ondelete="CASCADE"),
    )
    _timestamp_indexes("loan_repayments", soft_delete=False)
    op.create_index("ix_loan_repayments_loan_id", "loan_repayments", ["loan_id"])
    op.create_index("ix_loan_repayments_payment_date", "loan_repayments", ["payment_date"])

    op.create_table(
        "rent_rolls",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("property_id", sa.String(), nullable=False),
        sa.Column("room_number", sa.String(20), nullable=False),
        sa.Column("tenant_name", sa.String(100), nullable=True),
        sa.Column("monthly_rent", sa.Numeric(12, 2), nullable=False),
        sa.Column("occupancy_status", sa.String(20), nullable=False),
        sa.Column("lease_start_date", sa.Date(), nullable=True),
        sa.Column("lease_end_date", sa.Date(), nullable=True),
        sa.Column("security_deposit", sa.Numeric(12, 2), nullable=True),
        sa.Column("key_money", sa.Numeric(12, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    _timestamp_indexes("rent_rolls")
    op.create_index("ix_rent_rolls_property_id", "rent_rolls", ["property_id"])
    op.create_index(
        "uq_rent_rolls_property_room_live",
        "rent_rolls",
        ["property_id", "room_number"],
        unique=True,
        postgresql_where=LIVE,
    )

    op.create_table(
        "expenses",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("property_id", sa.String(), nullable=False),
        sa.Column("expense_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("amount", _money(), nullable=False),
        sa.Column("vendor", sa.String(100), nullable=True),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("receipt_url", sa.String(500), nullable=True),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("recurring_frequency", sa.String(20), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    _timestamp_indexes("expenses")
    op.create_index("ix_expenses_property_id", "expenses", ["property_id"])
    op.create_index("ix_expenses_expense_date", "expenses", ["expense_date"])
    op.create_index("ix_expenses_category", "expenses", ["category"])


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("expenses", "rent_rolls", "loan_repayments", "loans", "owners", "properties", "users"):
        op.drop_table(table)
