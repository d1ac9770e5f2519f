"""Agent accounts: administrator management, self-service profile and username lookup."""

from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode
from sheetshare.models.principal import Principal
from sheetshare.models.user import ProfileRead, User, UserRead
from sheetshare.repos import ShareRepository, UserRepository

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3


class UserService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.share_repo = ShareRepository(db)

    async def _get_managed_user(self, user_id: int, principal: Principal) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user or user.manager_id != principal.id:
            raise ErrCode.USER_NOT_FOUND.with_messages("User not found or access denied")
        return user

    async def list_users(self, principal: Principal) -> list[UserRead]:
        users = await self.user_repo.get_by_manager(principal.id)
        return [UserRead.model_validate(u) for u in users]

    async def set_active(self, user_id: int, principal: Principal, is_active: bool) -> None:
        user = await self._get_managed_user(user_id, principal)
        await self.user_repo.set_active(user, is_active)
        await self.db.commit()
        logger.info(f"User {user_id} {'activated' if is_active else 'deactivated'} by manager {principal.id}")

    async def delete_user(self, user_id: int, principal: Principal) -> None:
        """Delete an agent and its sharing grants. Rows the agent wrote are kept."""
        user = await self._get_managed_user(user_id, principal)
        grants = await self.share_repo.delete_by_user(user_id)
        await self.user_repo.delete(user)
        await self.db.commit()
        logger.info(f"User {user_id} deleted by manager {principal.id} ({grants} grants revoked)")

    async def get_profile(self, principal: Principal) -> ProfileRead:
        user = await self.user_repo.get_by_id(principal.id)
        if not user:
            raise ErrCode.USER_NOT_FOUND.with_messages("User not found")
        return await self._to_profile(user)

    async def update_profile(self, principal: Principal, username: str | None) -> ProfileRead:
        user = await self.user_repo.get_by_id(principal.id)
        if not user:
            raise ErrCode.USER_NOT_FOUND.with_messages("User not found")

        username = (username or "").strip()
        if len(username) < MIN_USERNAME_LENGTH:
            raise ErrCode.INVALID_REQUEST.with_messages(
                f"Username must be at least {MIN_USERNAME_LENGTH} characters"
            )
        if username != user.username and await self.user_repo.find_by_username(username, exclude_id=user.id):
            raise ErrCode.USERNAME_TAKEN.with_messages("Username already taken")

        await self.user_repo.set_username(user, username)
        await self.db.commit()
        logger.info(f"User {user.id} renamed to {username!r}")
        return await self._to_profile(user)

    async def username_exists(self, username: str | None) -> bool:
        if not username:
            raise ErrCode.INVALID_REQUEST.with_messages("Username is required")
        return await self.user_repo.find_by_username(username) is not None

    async def _to_profile(self, user: User) -> ProfileRead:
        assert user.id is not None
        manager_name = None
        if user.manager_id is not None:
            manager_name = (await self.user_repo.get_usernames({user.manager_id})).get(user.manager_id)
        return ProfileRead(
            id=user.id,
            username=user.username,
            is_active=user.is_active,
            manager_id=user.manager_id,
            manager_name=manager_name,
        )
