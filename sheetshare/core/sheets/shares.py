from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode
from sheetshare.core.auth import SheetPolicy
from sheetshare.models.principal import Principal
from sheetshare.models.share import ShareGrantCreate, ShareGrantRead
from sheetshare.repos import ShareRepository, UserRepository

logger = logging.getLogger(__name__)


class ShareService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.policy = SheetPolicy(db)
        self.share_repo = ShareRepository(db)
        self.user_repo = UserRepository(db)

    async def list_grants(self, sheet_id: int, principal: Principal) -> list[ShareGrantRead]:
        await self.policy.authorize_manage(sheet_id, principal)
        grants = await self.share_repo.list_by_sheet(sheet_id)
        return [ShareGrantRead.model_validate(g) for g in grants]

    async def grant(self, principal: Principal, data: ShareGrantCreate) -> ShareGrantRead:
        await self.policy.authorize_manage(data.sheet_id, principal)

        user = await self.user_repo.get_by_id(data.user_id)
        if not user or user.manager_id != principal.id:
            raise ErrCode.USER_NOT_FOUND.with_messages("User not found or access denied")
        if await self.share_repo.get(data.sheet_id, data.user_id):
            raise ErrCode.SHARE_ALREADY_EXISTS.with_messages("Sheet is already shared with this user")

        grant = await self.share_repo.create(principal.id, data.sheet_id, data.user_id)
        await self.db.commit()
        logger.info(f"Sheet {data.sheet_id} shared with user {data.user_id}")
        return ShareGrantRead.model_validate(grant)

    async def revoke(self, sheet_id: int, user_id: int, principal: Principal) -> None:
        await self.policy.authorize_manage(sheet_id, principal)
        await self.share_repo.delete(sheet_id, user_id)
        await self.db.commit()
        logger.info(f"Sheet {sheet_id} unshared from user {user_id}")
