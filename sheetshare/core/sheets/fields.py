from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode
from sheetshare.core.auth import SheetPolicy
from sheetshare.models.field import SheetField, SheetFieldCreate, SheetFieldRead, SheetFieldUpdate
from sheetshare.models.principal import Principal
from sheetshare.repos import CellRepository, FieldRepository

logger = logging.getLogger(__name__)


class FieldService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.policy = SheetPolicy(db)
        self.field_repo = FieldRepository(db)
        self.cell_repo = CellRepository(db)

    async def _get_owned_field(self, field_id: int, principal: Principal) -> SheetField:
        field = await self.field_repo.get_by_id(field_id)
        if not field or field.manager_id != principal.id:
            raise ErrCode.FIELD_NOT_FOUND.with_messages("Field not found or access denied")
        return field

    async def list_fields(self, sheet_id: int, principal: Principal) -> list[SheetFieldRead]:
        await self.policy.authorize_manage(sheet_id, principal)
        fields = await self.field_repo.list_by_sheet(sheet_id)
        return [SheetFieldRead.model_validate(f) for f in fields]

    async def create_field(self, principal: Principal, data: SheetFieldCreate) -> SheetFieldRead:
        if not data.title:
            raise ErrCode.INVALID_REQUEST.with_messages("Sheet ID and field name are required")
        await self.policy.authorize_manage(data.sheet_id, principal)

        field = await self.field_repo.create(data, principal.id)
        await self.db.commit()
        logger.info(f"Field {field.id} ({field.type}) created on sheet {data.sheet_id}")
        return SheetFieldRead.model_validate(field)

    async def update_field(self, field_id: int, principal: Principal, data: SheetFieldUpdate) -> SheetFieldRead:
        await self._get_owned_field(field_id, principal)
        updated = await self.field_repo.update(field_id, data)
        await self.db.commit()
        return SheetFieldRead.model_validate(updated)

    async def delete_field(self, field_id: int, principal: Principal) -> None:
        """Remove a column and every cell written to it, across all rows and owners."""
        await self._get_owned_field(field_id, principal)
        try:
            cells = await self.cell_repo.delete_by_field(field_id)
            await self.field_repo.delete(field_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"Field {field_id} deleted with {cells} cells")
