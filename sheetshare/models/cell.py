from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, Index, text
from sqlmodel import Column, Field, SQLModel


class Cell(SQLModel, table=True):
    """One value of one column of one logical row for one owner.

    ``owner_user_id`` is NULL for rows written by the sheet's administrator.
    """

    id: int | None = Field(default=None, primary_key=True)
    sheet_id: int = Field(foreign_key="sheet.id", index=True)
    field_id: int = Field(foreign_key="field.id", index=True)
    row_key: str = Field(max_length=64, index=True)
    owner_user_id: int | None = Field(default=None, index=True)
    value: str | None = Field(default=None)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )

    # NULL owners never collide in a plain unique constraint, so the admin
    # owner is folded to 0 inside the index expression.
    __table_args__ = (
        Index(
            "uq_cell_identity",
            "sheet_id",
            "field_id",
            "row_key",
            text("coalesce(owner_user_id, 0)"),
            unique=True,
        ),
    )


class CellWrite(SQLModel):
    sheet_id: int
    field_id: int
    row_key: str = Field(max_length=64)
    value: str | None = None


class CellWriteResult(SQLModel):
    cell_id: int
    was_created: bool
