from datetime import datetime, timezone
from enum import StrEnum

import sqlalchemy as sa
from sqlalchemy import TIMESTAMP
from sqlmodel import Column, Field, SQLModel


class FieldType(StrEnum):
    STATIC = "static"
    DYNAMIC = "dynamic"


class DisplayFormat(StrEnum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    CHECKBOX = "checkbox"


class SheetFieldBase(SQLModel):
    title: str = Field(max_length=255)
    type: FieldType = Field(
        default=FieldType.STATIC,
        sa_column=sa.Column(sa.String(16), nullable=False, server_default=FieldType.STATIC.value),
        description="static | dynamic",
    )
    display_format: DisplayFormat = Field(
        default=DisplayFormat.TEXT,
        sa_column=sa.Column(sa.String(16), nullable=False, server_default=DisplayFormat.TEXT.value),
    )
    display_width: str = Field(default="150", max_length=32)


class SheetField(SheetFieldBase, table=True):
    """A column of a sheet. Catalog order is ascending id."""

    __tablename__ = "field"

    id: int | None = Field(default=None, primary_key=True)
    sheet_id: int = Field(foreign_key="sheet.id", index=True)
    manager_id: int = Field(index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )

    @property
    def is_static(self) -> bool:
        return self.type == FieldType.STATIC


class SheetFieldCreate(SheetFieldBase):
    sheet_id: int


class SheetFieldUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    type: FieldType | None = None
    display_format: DisplayFormat | None = None
    display_width: str | None = Field(default=None, max_length=32)


class SheetFieldRead(SheetFieldBase):
    id: int
    sheet_id: int
    manager_id: int
    created_at: datetime
