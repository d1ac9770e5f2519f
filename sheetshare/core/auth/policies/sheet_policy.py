from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode
from sheetshare.models.principal import Principal
from sheetshare.models.sheet import Sheet
from sheetshare.repos.share import ShareRepository
from sheetshare.repos.sheet import SheetRepository

from .resource_policy import ResourcePolicyBase


class SheetPolicy(ResourcePolicyBase[Sheet]):
    """Sheet visibility.

    Invisible sheets are reported as not found whether they are missing or
    belong to someone else.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.sheet_repo = SheetRepository(db)
        self.share_repo = ShareRepository(db)

    async def authorize_read(self, resource_id: int, principal: Principal) -> Sheet:
        sheet = await self.sheet_repo.get_by_id(resource_id)
        if not sheet:
            raise ErrCode.SHEET_NOT_FOUND.with_messages(f"Sheet {resource_id} not found or access denied")

        # Owner can always read
        if principal.is_admin and sheet.manager_id == principal.id:
            return sheet

        # Agents need a sharing grant
        if not principal.is_admin and await self.share_repo.get(resource_id, principal.id):
            return sheet

        raise ErrCode.SHEET_NOT_FOUND.with_messages(f"Sheet {resource_id} not found or access denied")

    async def authorize_write(self, resource_id: int, principal: Principal) -> Sheet:
        # Row ownership is checked by the cell service.
        return await self.authorize_read(resource_id, principal)

    async def authorize_delete(self, resource_id: int, principal: Principal) -> Sheet:
        return await self.authorize_manage(resource_id, principal)

    async def authorize_manage(self, resource_id: int, principal: Principal) -> Sheet:
        """Structure, sharing and deletion are reserved to the owning administrator."""
        sheet = await self.sheet_repo.get_by_id(resource_id)
        if not sheet or not principal.is_admin or sheet.manager_id != principal.id:
            raise ErrCode.SHEET_NOT_FOUND.with_messages(f"Sheet {resource_id} not found or access denied")
        return sheet
