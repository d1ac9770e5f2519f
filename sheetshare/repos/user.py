from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.models.user import User


class UserRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_manager(self, manager_id: int) -> list[User]:
        stmt = select(User).where(User.manager_id == manager_id).order_by(col(User.username).asc())
        result = await self.db.exec(stmt)
        return list(result.all())

    async def get_usernames(self, user_ids: set[int]) -> dict[int, str]:
        if not user_ids:
            return {}
        stmt = select(User.id, User.username).where(col(User.id).in_(user_ids))
        result = await self.db.exec(stmt)
        return {user_id: username for user_id, username in result.all()}

    async def find_by_username(self, username: str, exclude_id: int | None = None) -> User | None:
        stmt = select(User).where(User.username == username)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        result = await self.db.exec(stmt)
        return result.first()

    async def set_active(self, user: User, is_active: bool) -> User:
        user.is_active = is_active
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def set_username(self, user: User, username: str) -> User:
        user.username = username
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await self.db.flush()
