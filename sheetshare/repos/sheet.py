from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.models.share import ShareGrant
from sheetshare.models.sheet import Sheet, SheetCreate, SheetUpdate


class SheetRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, data: SheetCreate, manager_id: int) -> Sheet:
        sheet = Sheet(manager_id=manager_id, sheet_number=data.sheet_number, sheet_name=data.sheet_name)
        self.db.add(sheet)
        await self.db.flush()
        await self.db.refresh(sheet)
        return sheet

    async def get_by_id(self, sheet_id: int) -> Sheet | None:
        return await self.db.get(Sheet, sheet_id)

    async def get_by_manager(self, manager_id: int) -> list[Sheet]:
        stmt = select(Sheet).where(Sheet.manager_id == manager_id).order_by(col(Sheet.created_at).desc())
        result = await self.db.exec(stmt)
        return list(result.all())

    async def find_by_number(self, manager_id: int, sheet_number: int, exclude_id: int | None = None) -> Sheet | None:
        stmt = select(Sheet).where(Sheet.manager_id == manager_id, Sheet.sheet_number == sheet_number)
        if exclude_id is not None:
            stmt = stmt.where(Sheet.id != exclude_id)
        result = await self.db.exec(stmt)
        return result.first()

    async def find_by_name(self, manager_id: int, sheet_name: str, exclude_id: int | None = None) -> Sheet | None:
        stmt = select(Sheet).where(Sheet.manager_id == manager_id, Sheet.sheet_name == sheet_name)
        if exclude_id is not None:
            stmt = stmt.where(Sheet.id != exclude_id)
        result = await self.db.exec(stmt)
        return result.first()

    async def get_shared_with(self, user_id: int) -> list[Sheet]:
        stmt = (
            select(Sheet)
            .join(ShareGrant, col(ShareGrant.sheet_id) == col(Sheet.id))
            .where(ShareGrant.user_id == user_id)
            .order_by(col(Sheet.created_at).desc())
        )
        result = await self.db.exec(stmt)
        return list(result.all())

    async def update(self, sheet_id: int, update: SheetUpdate) -> Sheet | None:
        sheet = await self.db.get(Sheet, sheet_id)
        if not sheet:
            return None
        update_data = update.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in update_data.items():
            setattr(sheet, key, value)
        self.db.add(sheet)
        await self.db.flush()
        await self.db.refresh(sheet)
        return sheet

    async def delete(self, sheet_id: int) -> bool:
        sheet = await self.db.get(Sheet, sheet_id)
        if not sheet:
            return False
        await self.db.delete(sheet)
        await self.db.flush()
        return True
