from enum import IntEnum

from sqlmodel import Field, SQLModel


class ViewType(IntEnum):
    CARD = 0
    TABLE = 1


class ViewPreference(SQLModel, table=True):
    __tablename__ = "sheetview"

    id: int | None = Field(default=None, primary_key=True)
    manager_id: int = Field(unique=True, index=True)
    view_type: int = Field(default=ViewType.CARD.value)


class ViewPreferenceRead(SQLModel):
    view_type: int


class ViewPreferenceUpdate(SQLModel):
    view_type: int
