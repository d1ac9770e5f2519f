from datetime import datetime

from pydantic import BaseModel

from .reconcile import Row


class CellValueRead(BaseModel):
    id: int
    value: str


class RowRead(BaseModel):
    row_key: str
    owner_user_id: int | None
    username: str | None = None
    created_at: datetime
    min_cell_id: int
    cells: dict[int, CellValueRead]

    @classmethod
    def from_row(cls, row: Row) -> "RowRead":
        return cls(
            row_key=row.row_key,
            owner_user_id=row.owner_user_id,
            username=row.username,
            created_at=row.created_at,
            min_cell_id=row.min_cell_id,
            cells={field_id: CellValueRead(id=c.id, value=c.value) for field_id, c in row.cells.items()},
        )
