from __future__ import annotations

import logging

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode, ErrCodeError
from sheetshare.core.auth import SheetPolicy
from sheetshare.core.rows import Row, RowRead, attach_usernames, group_cells, owner_ids
from sheetshare.models.cell import CellWrite, CellWriteResult
from sheetshare.models.field import SheetFieldRead
from sheetshare.models.principal import Principal, Role
from sheetshare.models.sheet import SheetRead
from sheetshare.repos import CellRepository, FieldRepository, UserRepository

logger = logging.getLogger(__name__)


class SheetData(BaseModel):
    sheet: SheetRead
    fields: list[SheetFieldRead]
    rows: list[RowRead]


class CellService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.policy = SheetPolicy(db)
        self.cell_repo = CellRepository(db)
        self.field_repo = FieldRepository(db)
        self.user_repo = UserRepository(db)

    async def list_rows(self, sheet_id: int, viewer: Principal) -> list[Row]:
        """Reconciled rows visible to the viewer, in display order.

        Administrators see every owner's rows; agents only their own.
        Authorization against the sheet is the caller's job.
        """
        if viewer.is_admin:
            cells = await self.cell_repo.list_by_sheet(sheet_id)
        else:
            cells = await self.cell_repo.list_by_owner(sheet_id, viewer.id)

        rows = group_cells(cells)
        usernames = await self.user_repo.get_usernames(owner_ids(rows))
        attach_usernames(rows, usernames)
        return rows

    async def get_sheet_data(self, sheet_id: int, viewer: Principal) -> SheetData:
        sheet = await self.policy.authorize_read(sheet_id, viewer)
        fields = await self.field_repo.list_by_sheet(sheet_id)
        if not fields:
            raise ErrCode.SHEET_NOT_DESIGNED.with_messages("You must design the sheet structure first.")

        rows = await self.list_rows(sheet_id, viewer)
        return SheetData(
            sheet=SheetRead.model_validate(sheet),
            fields=[SheetFieldRead.model_validate(f) for f in fields],
            rows=[RowRead.from_row(row) for row in rows],
        )

    async def is_static_field_editable(self, sheet_id: int, owner_user_id: int | None, row_key: str) -> bool:
        """Static fields are writable only on the owner's first row.

        An owner without rows yet may write: the row being created becomes
        the first one.
        """
        first = await self.cell_repo.first_row_key(sheet_id, owner_user_id)
        return first is None or first == row_key

    async def upsert_cell(
        self,
        sheet_id: int,
        field_id: int,
        row_key: str,
        owner_user_id: int | None,
        value: str | None,
        writer_role: Role,
    ) -> CellWriteResult:
        if writer_role == Role.AGENT and owner_user_id is None:
            raise ErrCode.ROW_ACCESS_DENIED.with_messages("Agents can only write their own rows")
        if writer_role == Role.ADMIN and owner_user_id is not None:
            raise ErrCode.ROW_ACCESS_DENIED.with_messages("Administrators write to administrator-owned rows only")

        return await self.cell_repo.upsert(sheet_id, field_id, row_key, owner_user_id, value)

    async def write_cell(self, principal: Principal, data: CellWrite) -> CellWriteResult:
        if not data.sheet_id or not data.field_id or not data.row_key:
            raise ErrCode.INVALID_REQUEST.with_messages("Missing required fields")

        sheet = await self.policy.authorize_write(data.sheet_id, principal)
        field = await self.field_repo.get_by_id(data.field_id)
        if not field or field.sheet_id != sheet.id:
            raise ErrCode.FIELD_NOT_FOUND.with_messages(f"Field {data.field_id} not found on sheet {data.sheet_id}")

        owner_user_id = None if principal.is_admin else principal.id
        if field.is_static and not await self.is_static_field_editable(data.sheet_id, owner_user_id, data.row_key):
            raise ErrCode.STATIC_FIELD_LOCKED.with_messages(
                f"Field '{field.title}' is static and can only be edited on the first row"
            )

        args = (data.sheet_id, data.field_id, data.row_key, owner_user_id, data.value, principal.role)
        try:
            result = await self.upsert_cell(*args)
        except ErrCodeError as e:
            if e.code != ErrCode.CELL_WRITE_CONFLICT:
                raise
            # A concurrent writer created the cell first; this write becomes an update.
            logger.warning(f"Cell write conflict on sheet {data.sheet_id}, retrying as update: {e}")
            result = await self.upsert_cell(*args)

        await self.db.commit()
        logger.info(
            f"Cell {result.cell_id} {'created' if result.was_created else 'updated'} "
            f"on sheet {data.sheet_id} by {principal.role} {principal.id}"
        )
        return result

    async def delete_row(
        self,
        sheet_id: int,
        row_key: str,
        owner_user_id: int | None,
        requester: Principal,
    ) -> None:
        """Delete every cell of one owner's row. Deleting a missing row is a no-op."""
        if not sheet_id or not row_key:
            raise ErrCode.INVALID_REQUEST.with_messages("Missing row_key or sheet_id")

        if requester.is_admin:
            await self.policy.authorize_delete(sheet_id, requester)
        else:
            if owner_user_id != requester.id:
                raise ErrCode.ROW_ACCESS_DENIED.with_messages("Agents can only delete their own rows")
            await self.policy.authorize_read(sheet_id, requester)

        deleted = await self.cell_repo.delete_row(sheet_id, row_key, owner_user_id)
        await self.db.commit()
        logger.info(f"Deleted row {row_key} (owner {owner_user_id}) on sheet {sheet_id}: {deleted} cells")
