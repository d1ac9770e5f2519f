from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP
from sqlmodel import Column, Field, SQLModel


class User(SQLModel, table=True):
    """Local agent account. Credentials are managed by the sign-in service."""

    id: int | None = Field(default=None, primary_key=True)
    manager_id: int | None = Field(default=None, index=True)
    username: str = Field(max_length=255, unique=True, index=True)
    is_active: bool = Field(default=False)
    is_password_request: bool = Field(default=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )


class UserRead(SQLModel):
    id: int
    username: str
    is_active: bool
    is_password_request: bool


class UserUpdate(SQLModel):
    is_active: bool


class ProfileRead(SQLModel):
    id: int
    username: str
    is_active: bool
    manager_id: int | None
    manager_name: str | None = None


class ProfileUpdate(SQLModel):
    username: str | None = None


class UsernameCheck(SQLModel):
    username: str | None = None


class UsernameAvailability(SQLModel):
    exists: bool
