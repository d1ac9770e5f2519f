from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.models.field import SheetField, SheetFieldCreate, SheetFieldUpdate


class FieldRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, data: SheetFieldCreate, manager_id: int) -> SheetField:
        field = SheetField(
            sheet_id=data.sheet_id,
            manager_id=manager_id,
            title=data.title,
            type=data.type,
            display_format=data.display_format,
            display_width=data.display_width,
        )
        self.db.add(field)
        await self.db.flush()
        await self.db.refresh(field)
        return field

    async def get_by_id(self, field_id: int) -> SheetField | None:
        return await self.db.get(SheetField, field_id)

    async def list_by_sheet(self, sheet_id: int) -> list[SheetField]:
        stmt = select(SheetField).where(SheetField.sheet_id == sheet_id).order_by(col(SheetField.id).asc())
        result = await self.db.exec(stmt)
        return list(result.all())

    async def update(self, field_id: int, update: SheetFieldUpdate) -> SheetField | None:
        field = await self.db.get(SheetField, field_id)
        if not field:
            return None
        update_data = update.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in update_data.items():
            setattr(field, key, value)
        self.db.add(field)
        await self.db.flush()
        await self.db.refresh(field)
        return field

    async def delete(self, field_id: int) -> bool:
        field = await self.db.get(SheetField, field_id)
        if not field:
            return False
        await self.db.delete(field)
        await self.db.flush()
        return True

    async def delete_by_sheet(self, sheet_id: int) -> int:
        result = await self.db.exec(delete(SheetField).where(col(SheetField.sheet_id) == sheet_id))
        return result.rowcount or 0
