"""
Reconcile flat cell records into ordered logical rows.

A logical row is identified by the pair ``(row_key, owner_user_id)``. Row keys
are chosen by the writer and carry no temporal meaning, and two owners may
reuse the same key, so grouping never uses ``row_key`` alone. Chronological
order is rebuilt from the lowest cell id seen in each row.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

ADMIN_USERNAME = "Admin"
UNKNOWN_USERNAME = "Unknown"

RowIdentity = tuple[str, int | None]


class CellLike(Protocol):
    id: int | None
    field_id: int
    row_key: str
    owner_user_id: int | None
    value: str | None
    created_at: datetime


@dataclass
class CellValue:
    id: int
    value: str


@dataclass
class Row:
    row_key: str
    owner_user_id: int | None
    min_cell_id: int
    created_at: datetime
    cells: dict[int, CellValue] = field(default_factory=dict)
    username: str | None = None

    @property
    def identity(self) -> RowIdentity:
        return (self.row_key, self.owner_user_id)

    def value_of(self, field_id: int) -> str:
        cell = self.cells.get(field_id)
        return cell.value if cell else ""


def row_sort_key(row: Row) -> tuple[int, int]:
    # Administrator rows (owner None) sort as owner 0, ahead of every agent.
    return (row.owner_user_id or 0, row.min_cell_id)


def group_cells(cells: Iterable[CellLike]) -> list[Row]:
    """Group cells into rows and return them in display order.

    Cells may arrive in any order; each row's ``min_cell_id`` only ever moves
    down as lower ids are encountered, and ``created_at`` follows that cell.
    """
    rows: dict[RowIdentity, Row] = {}
    for cell in cells:
        assert cell.id is not None
        key: RowIdentity = (cell.row_key, cell.owner_user_id)
        row = rows.get(key)
        if row is None:
            row = Row(
                row_key=cell.row_key,
                owner_user_id=cell.owner_user_id,
                min_cell_id=cell.id,
                created_at=cell.created_at,
            )
            rows[key] = row
        elif cell.id < row.min_cell_id:
            row.min_cell_id = cell.id
            row.created_at = cell.created_at
        row.cells[cell.field_id] = CellValue(id=cell.id, value=cell.value or "")
    return sorted(rows.values(), key=row_sort_key)


def attach_usernames(rows: Iterable[Row], usernames: Mapping[int, str]) -> None:
    for row in rows:
        if row.owner_user_id is None:
            row.username = ADMIN_USERNAME
        else:
            row.username = usernames.get(row.owner_user_id, UNKNOWN_USERNAME)


def owner_ids(rows: Iterable[Row]) -> set[int]:
    return {row.owner_user_id for row in rows if row.owner_user_id is not None}
