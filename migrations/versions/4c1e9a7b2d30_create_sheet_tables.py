"""create sheet, field, cell, sharing and account tables

Revision ID: 4c1e9a7b2d30
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1e9a7b2d30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "sheet",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sheet_number", sa.Integer(), nullable=False),
        sa.Column("sheet_name", sa.String(length=255), nullable=False),
        sa.Column("manager_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.UniqueConstraint("manager_id", "sheet_number", name="uq_sheet_manager_number"),
        sa.UniqueConstraint("manager_id", "sheet_name", name="uq_sheet_manager_name"),
    )
    op.create_index("ix_sheet_manager_id", "sheet", ["manager_id"])

    op.create_table(
        "field",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False, server_default="static"),
        sa.Column("display_format", sa.String(length=16), nullable=False, server_default="text"),
        sa.Column("display_width", sa.String(length=32), nullable=False),
        sa.Column("sheet_id", sa.Integer(), sa.ForeignKey("sheet.id"), nullable=False),
        sa.Column("manager_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_field_sheet_id", "field", ["sheet_id"])
    op.create_index("ix_field_manager_id", "field", ["manager_id"])

    op.create_table(
        "cell",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sheet_id", sa.Integer(), sa.ForeignKey("sheet.id"), nullable=False),
        sa.Column("field_id", sa.Integer(), sa.ForeignKey("field.id"), nullable=False),
        sa.Column("row_key", sa.String(length=64), nullable=False),
        sa.Column("owner_user_id", sa.Integer(), nullable=True),
        sa.Column("value", sa.String(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_cell_sheet_id", "cell", ["sheet_id"])
    op.create_index("ix_cell_field_id", "cell", ["field_id"])
    op.create_index("ix_cell_row_key", "cell", ["row_key"])
    op.create_index("ix_cell_owner_user_id", "cell", ["owner_user_id"])
    op.create_index(
        "uq_cell_identity",
        "cell",
        ["sheet_id", "field_id", "row_key", sa.text("coalesce(owner_user_id, 0)")],
        unique=True,
    )

    op.create_table(
        "sharegrant",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("manager_id", sa.Integer(), nullable=False),
        sa.Column("sheet_id", sa.Integer(), sa.ForeignKey("sheet.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.UniqueConstraint("sheet_id", "user_id", name="uq_sharegrant_sheet_user"),
    )
    op.create_index("ix_sharegrant_manager_id", "sharegrant", ["manager_id"])
    op.create_index("ix_sharegrant_sheet_id", "sharegrant", ["sheet_id"])
    op.create_index("ix_sharegrant_user_id", "sharegrant", ["user_id"])

    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("manager_id", sa.Integer(), nullable=True),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_password_request", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_user_manager_id", "user", ["manager_id"])
    op.create_index("ix_user_username", "user", ["username"], unique=True)

    op.create_table(
        "apikey",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("api_key", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_apikey_customer_id", "apikey", ["customer_id"], unique=True)
    op.create_index("ix_apikey_api_key", "apikey", ["api_key"])

    op.create_table(
        "sheetview",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("manager_id", sa.Integer(), nullable=False),
        sa.Column("view_type", sa.Integer(), nullable=False),
    )
    op.create_index("ix_sheetview_manager_id", "sheetview", ["manager_id"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("sheetview")
    op.drop_table("apikey")
    op.drop_table("user")
    op.drop_table("sharegrant")
    op.drop_index("uq_cell_identity", table_name="cell")
    op.drop_table("cell")
    op.drop_table("field")
    op.drop_table("sheet")
