from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode
from sheetshare.core.auth import SheetPolicy
from sheetshare.models.principal import Principal
from sheetshare.models.sheet import (
    SharedSheetRead,
    SheetCreate,
    SheetRead,
    SheetUpdate,
    SheetWithShareCount,
)
from sheetshare.repos import CellRepository, FieldRepository, ShareRepository, SheetRepository, UserRepository

logger = logging.getLogger(__name__)


class SheetService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.policy = SheetPolicy(db)
        self.sheet_repo = SheetRepository(db)
        self.field_repo = FieldRepository(db)
        self.cell_repo = CellRepository(db)
        self.share_repo = ShareRepository(db)
        self.user_repo = UserRepository(db)

    async def list_sheets(self, manager_id: int) -> list[SheetWithShareCount]:
        sheets = await self.sheet_repo.get_by_manager(manager_id)
        counts = await self.share_repo.count_by_sheets([s.id for s in sheets if s.id is not None])
        return [
            SheetWithShareCount(**s.model_dump(), share_count=counts.get(s.id or 0, 0))
            for s in sheets
        ]

    async def list_shared_sheets(self, user_id: int) -> list[SharedSheetRead]:
        sheets = await self.sheet_repo.get_shared_with(user_id)
        managers = await self.user_repo.get_usernames({s.manager_id for s in sheets})
        return [SharedSheetRead(**s.model_dump(), manager_name=managers.get(s.manager_id)) for s in sheets]

    async def create_sheet(self, manager_id: int, data: SheetCreate) -> SheetRead:
        if not data.sheet_number or not data.sheet_name:
            raise ErrCode.INVALID_REQUEST.with_messages("Sheet number and sheet name are required")
        if await self.sheet_repo.find_by_number(manager_id, data.sheet_number):
            raise ErrCode.SHEET_ALREADY_EXISTS.with_messages("A sheet with this number already exists")
        if await self.sheet_repo.find_by_name(manager_id, data.sheet_name):
            raise ErrCode.SHEET_ALREADY_EXISTS.with_messages("A sheet with this name already exists")

        sheet = await self.sheet_repo.create(data, manager_id)
        await self.db.commit()
        logger.info(f"Sheet {sheet.id} created by manager {manager_id}")
        return SheetRead.model_validate(sheet)

    async def get_sheet(self, sheet_id: int, principal: Principal) -> SheetRead:
        sheet = await self.policy.authorize_manage(sheet_id, principal)
        return SheetRead.model_validate(sheet)

    async def update_sheet(self, sheet_id: int, principal: Principal, data: SheetUpdate) -> SheetRead:
        sheet = await self.policy.authorize_manage(sheet_id, principal)
        if data.sheet_name and data.sheet_name != sheet.sheet_name:
            if await self.sheet_repo.find_by_name(principal.id, data.sheet_name, exclude_id=sheet_id):
                raise ErrCode.SHEET_ALREADY_EXISTS.with_messages("Sheet name already exists")
        if data.sheet_number is not None and data.sheet_number != sheet.sheet_number:
            if await self.sheet_repo.find_by_number(principal.id, data.sheet_number, exclude_id=sheet_id):
                raise ErrCode.SHEET_ALREADY_EXISTS.with_messages("A sheet with this number already exists")

        updated = await self.sheet_repo.update(sheet_id, data)
        await self.db.commit()
        return SheetRead.model_validate(updated)

    async def delete_sheet(self, sheet_id: int, principal: Principal) -> None:
        """Delete a sheet with its cells, fields and sharing grants as one unit."""
        await self.policy.authorize_delete(sheet_id, principal)
        try:
            cells = await self.cell_repo.delete_by_sheet(sheet_id)
            fields = await self.field_repo.delete_by_sheet(sheet_id)
            grants = await self.share_repo.delete_by_sheet(sheet_id)
            await self.sheet_repo.delete(sheet_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"Sheet {sheet_id} deleted with {cells} cells, {fields} fields, {grants} grants")
