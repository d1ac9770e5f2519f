import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode
from sheetshare.models.cell import Cell, CellWriteResult

logger = logging.getLogger(__name__)


def owner_clause(owner_user_id: int | None) -> ColumnElement[bool]:
    """Match cells of one owner; ``None`` selects the administrator's cells."""
    if owner_user_id is None:
        return col(Cell.owner_user_id).is_(None)
    return col(Cell.owner_user_id) == owner_user_id


class CellRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_by_sheet(self, sheet_id: int) -> list[Cell]:
        """All cells of a sheet, in whatever order the store returns them."""
        stmt = select(Cell).where(Cell.sheet_id == sheet_id)
        result = await self.db.exec(stmt)
        return list(result.all())

    async def list_by_owner(self, sheet_id: int, owner_user_id: int | None) -> list[Cell]:
        stmt = select(Cell).where(Cell.sheet_id == sheet_id, owner_clause(owner_user_id))
        result = await self.db.exec(stmt)
        return list(result.all())

    async def get_by_identity(
        self,
        sheet_id: int,
        field_id: int,
        row_key: str,
        owner_user_id: int | None,
    ) -> Cell | None:
        stmt = select(Cell).where(
            Cell.sheet_id == sheet_id,
            Cell.field_id == field_id,
            Cell.row_key == row_key,
            owner_clause(owner_user_id),
        )
        result = await self.db.exec(stmt)
        return result.first()

    async def first_row_key(self, sheet_id: int, owner_user_id: int | None) -> str | None:
        """Row key of the owner's chronologically first row (lowest cell id)."""
        min_id = func.min(Cell.id)
        stmt = (
            select(Cell.row_key, min_id)
            .where(Cell.sheet_id == sheet_id, owner_clause(owner_user_id))
            .group_by(Cell.row_key)
            .order_by(min_id)
            .limit(1)
        )
        result = await self.db.exec(stmt)
        row = result.first()
        return row[0] if row else None

    async def create(self, cell: Cell) -> Cell:
        """Insert a cell inside a savepoint.

        A unique-identity violation rolls back only this insert and is raised
        as CELL_WRITE_CONFLICT so the caller can retry as an update.
        """
        try:
            async with self.db.begin_nested():
                self.db.add(cell)
                await self.db.flush()
        except IntegrityError as e:
            raise ErrCode.CELL_WRITE_CONFLICT.with_messages(
                f"Cell ({cell.sheet_id}, {cell.field_id}, {cell.row_key}, {cell.owner_user_id}) already exists"
            ) from e
        await self.db.refresh(cell)
        return cell

    async def update_value(self, cell: Cell, value: str | None) -> Cell:
        cell.value = value
        self.db.add(cell)
        await self.db.flush()
        await self.db.refresh(cell)
        return cell

    async def upsert(
        self,
        sheet_id: int,
        field_id: int,
        row_key: str,
        owner_user_id: int | None,
        value: str | None,
    ) -> CellWriteResult:
        existing = await self.get_by_identity(sheet_id, field_id, row_key, owner_user_id)
        if existing:
            await self.update_value(existing, value)
            assert existing.id is not None
            return CellWriteResult(cell_id=existing.id, was_created=False)

        cell = Cell(
            sheet_id=sheet_id,
            field_id=field_id,
            row_key=row_key,
            owner_user_id=owner_user_id,
            value=value,
            created_at=datetime.now(timezone.utc),
        )
        created = await self.create(cell)
        assert created.id is not None
        return CellWriteResult(cell_id=created.id, was_created=True)

    async def delete_row(self, sheet_id: int, row_key: str, owner_user_id: int | None) -> int:
        stmt = delete(Cell).where(
            col(Cell.sheet_id) == sheet_id,
            col(Cell.row_key) == row_key,
            owner_clause(owner_user_id),
        )
        result = await self.db.exec(stmt)
        return result.rowcount or 0

    async def delete_by_field(self, field_id: int) -> int:
        result = await self.db.exec(delete(Cell).where(col(Cell.field_id) == field_id))
        return result.rowcount or 0

    async def delete_by_sheet(self, sheet_id: int) -> int:
        result = await self.db.exec(delete(Cell).where(col(Cell.sheet_id) == sheet_id))
        return result.rowcount or 0
