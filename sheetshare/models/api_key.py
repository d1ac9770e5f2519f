from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP
from sqlmodel import Column, Field, SQLModel


class ApiKey(SQLModel, table=True):
    __tablename__ = "apikey"

    id: int | None = Field(default=None, primary_key=True)
    customer_id: int = Field(unique=True, index=True)
    api_key: str = Field(max_length=64, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )


class ApiKeyRead(SQLModel):
    api_key: str | None = None
    customer_id: int
