from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCodeError, handle_auth_error
from sheetshare.core.cells import CellService, SheetData
from sheetshare.core.sheets import SheetService
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_agent
from sheetshare.models.principal import Principal
from sheetshare.models.sheet import SharedSheetRead

router = APIRouter(tags=["agent-sheets"])


@router.get("/", response_model=list[SharedSheetRead])
async def list_shared_sheets(
    principal: Principal = Depends(require_agent),
    db: AsyncSession = Depends(get_session),
) -> list[SharedSheetRead]:
    """Sheets shared with the current agent, newest first."""
    return await SheetService(db).list_shared_sheets(principal.id)


@router.get("/{sheet_id}/data", response_model=SheetData)
async def get_shared_sheet_data(
    sheet_id: int,
    principal: Principal = Depends(require_agent),
    db: AsyncSession = Depends(get_session),
) -> SheetData:
    """The agent's own rows of a shared sheet, oldest first."""
    try:
        return await CellService(db).get_sheet_data(sheet_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
