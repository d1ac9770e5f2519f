from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.models.view_preference import ViewPreference, ViewType


class ViewPreferenceRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_or_create(self, manager_id: int) -> ViewPreference:
        stmt = select(ViewPreference).where(ViewPreference.manager_id == manager_id)
        result = await self.db.exec(stmt)
        preference = result.first()
        if preference:
            return preference
        preference = ViewPreference(manager_id=manager_id, view_type=ViewType.CARD.value)
        self.db.add(preference)
        await self.db.flush()
        await self.db.refresh(preference)
        return preference

    async def set_view_type(self, manager_id: int, view_type: int) -> ViewPreference:
        preference = await self.get_or_create(manager_id)
        preference.view_type = view_type
        self.db.add(preference)
        await self.db.flush()
        await self.db.refresh(preference)
        return preference
