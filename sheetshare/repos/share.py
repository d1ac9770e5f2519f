from sqlalchemy import delete, func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.models.share import ShareGrant


class ShareRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, manager_id: int, sheet_id: int, user_id: int) -> ShareGrant:
        grant = ShareGrant(manager_id=manager_id, sheet_id=sheet_id, user_id=user_id)
        self.db.add(grant)
        await self.db.flush()
        await self.db.refresh(grant)
        return grant

    async def get(self, sheet_id: int, user_id: int) -> ShareGrant | None:
        stmt = select(ShareGrant).where(ShareGrant.sheet_id == sheet_id, ShareGrant.user_id == user_id)
        result = await self.db.exec(stmt)
        return result.first()

    async def list_by_sheet(self, sheet_id: int) -> list[ShareGrant]:
        stmt = select(ShareGrant).where(ShareGrant.sheet_id == sheet_id).order_by(col(ShareGrant.id).asc())
        result = await self.db.exec(stmt)
        return list(result.all())

    async def count_by_sheets(self, sheet_ids: list[int]) -> dict[int, int]:
        if not sheet_ids:
            return {}
        stmt = (
            select(ShareGrant.sheet_id, func.count())
            .where(col(ShareGrant.sheet_id).in_(sheet_ids))
            .group_by(ShareGrant.sheet_id)
        )
        result = await self.db.exec(stmt)
        return {sheet_id: count for sheet_id, count in result.all()}

    async def delete(self, sheet_id: int, user_id: int) -> int:
        stmt = delete(ShareGrant).where(col(ShareGrant.sheet_id) == sheet_id, col(ShareGrant.user_id) == user_id)
        result = await self.db.exec(stmt)
        return result.rowcount or 0

    async def delete_by_sheet(self, sheet_id: int) -> int:
        result = await self.db.exec(delete(ShareGrant).where(col(ShareGrant.sheet_id) == sheet_id))
        return result.rowcount or 0

    async def delete_by_user(self, user_id: int) -> int:
        result = await self.db.exec(delete(ShareGrant).where(col(ShareGrant.user_id) == user_id))
        return result.rowcount or 0
