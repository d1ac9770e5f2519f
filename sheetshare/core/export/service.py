"""
Read-only projection of reconciled rows for external consumers.

Consumers authenticate with a customer id and API key instead of a session
credential. Rows are keyed by column title and carry two synthesized
columns, ``Username`` and ``Updated_At``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode
from sheetshare.core.rows import Row, attach_usernames, group_cells, owner_ids
from sheetshare.models.field import SheetField
from sheetshare.repos import ApiKeyRepository, CellRepository, FieldRepository, SheetRepository, UserRepository

logger = logging.getLogger(__name__)

USERNAME_COLUMN = "Username"
UPDATED_AT_COLUMN = "Updated_At"


class SheetExport(BaseModel):
    sheet_id: int
    sheet_name: str
    rows: list[dict[str, Any]]


class CustomerExport(BaseModel):
    data: list[SheetExport]


def flatten_row(row: Row, fields: list[SheetField]) -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for field in fields:
        assert field.id is not None
        flat[field.title] = row.value_of(field.id)
    flat[USERNAME_COLUMN] = row.username
    flat[UPDATED_AT_COLUMN] = row.created_at.isoformat()
    return flat


class ExportService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.api_key_repo = ApiKeyRepository(db)
        self.sheet_repo = SheetRepository(db)
        self.field_repo = FieldRepository(db)
        self.cell_repo = CellRepository(db)
        self.user_repo = UserRepository(db)

    async def authenticate(self, customer_id: str | None, api_key: str | None) -> int:
        if not customer_id or not api_key:
            raise ErrCode.INVALID_REQUEST.with_messages("Both customer_id and apikey are required")
        try:
            customer = int(customer_id)
        except ValueError:
            raise ErrCode.INVALID_REQUEST.with_messages("customer_id must be a valid number") from None
        if not await self.api_key_repo.verify(customer, api_key):
            raise ErrCode.INVALID_API_KEY.with_messages("Invalid customer_id or apikey")
        return customer

    async def export_customer(self, customer_id: str | None, api_key: str | None) -> CustomerExport:
        customer = await self.authenticate(customer_id, api_key)

        sheets = await self.sheet_repo.get_by_manager(customer)
        exports: list[SheetExport] = []
        for sheet in sheets:
            assert sheet.id is not None
            fields = await self.field_repo.list_by_sheet(sheet.id)
            rows = group_cells(await self.cell_repo.list_by_sheet(sheet.id))
            attach_usernames(rows, await self.user_repo.get_usernames(owner_ids(rows)))
            exports.append(
                SheetExport(
                    sheet_id=sheet.id,
                    sheet_name=sheet.sheet_name,
                    rows=[flatten_row(row, fields) for row in rows],
                )
            )

        logger.info(f"Exported {len(exports)} sheets for customer {customer}")
        return CustomerExport(data=exports)
