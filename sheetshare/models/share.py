from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, UniqueConstraint
from sqlmodel import Column, Field, SQLModel


class ShareGrant(SQLModel, table=True):
    """Grants an agent access to their own rows of an administrator's sheet."""

    id: int | None = Field(default=None, primary_key=True)
    manager_id: int = Field(index=True)
    sheet_id: int = Field(foreign_key="sheet.id", index=True)
    user_id: int = Field(index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )

    __table_args__ = (UniqueConstraint("sheet_id", "user_id", name="uq_sharegrant_sheet_user"),)


class ShareGrantCreate(SQLModel):
    sheet_id: int
    user_id: int


class ShareGrantRead(SQLModel):
    id: int
    manager_id: int
    sheet_id: int
    user_id: int
    created_at: datetime
