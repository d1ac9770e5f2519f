from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, UniqueConstraint
from sqlmodel import Column, Field, SQLModel


class SheetBase(SQLModel):
    sheet_number: int
    sheet_name: str = Field(max_length=255)


class Sheet(SheetBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    manager_id: int = Field(index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )

    __table_args__ = (
        UniqueConstraint("manager_id", "sheet_number", name="uq_sheet_manager_number"),
        UniqueConstraint("manager_id", "sheet_name", name="uq_sheet_manager_name"),
    )


class SheetCreate(SheetBase):
    pass


class SheetUpdate(SQLModel):
    sheet_number: int | None = None
    sheet_name: str | None = Field(default=None, max_length=255)


class SheetRead(SheetBase):
    id: int
    manager_id: int
    created_at: datetime


class SheetWithShareCount(SheetRead):
    share_count: int = 0


class SharedSheetRead(SheetRead):
    manager_name: str | None = None
