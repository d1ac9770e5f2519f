from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCodeError, handle_auth_error
from sheetshare.core.cells import CellService, SheetData
from sheetshare.core.sheets import SheetService
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_admin
from sheetshare.models.principal import Principal
from sheetshare.models.sheet import SheetCreate, SheetRead, SheetUpdate, SheetWithShareCount

router = APIRouter(tags=["sheets"])


class MessageResponse(BaseModel):
    message: str


@router.get("/", response_model=list[SheetWithShareCount])
async def list_sheets(
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> list[SheetWithShareCount]:
    """List the administrator's sheets, newest first, with share counts."""
    return await SheetService(db).list_sheets(principal.id)


@router.post("/", response_model=SheetRead, status_code=201)
async def create_sheet(
    data: SheetCreate,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SheetRead:
    try:
        return await SheetService(db).create_sheet(principal.id, data)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.get("/{sheet_id}", response_model=SheetRead)
async def get_sheet(
    sheet_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SheetRead:
    try:
        return await SheetService(db).get_sheet(sheet_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.patch("/{sheet_id}", response_model=SheetRead)
async def update_sheet(
    sheet_id: int,
    data: SheetUpdate,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SheetRead:
    try:
        return await SheetService(db).update_sheet(sheet_id, principal, data)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.delete("/{sheet_id}", response_model=MessageResponse)
async def delete_sheet(
    sheet_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Delete a sheet together with its cells, fields and sharing grants."""
    try:
        await SheetService(db).delete_sheet(sheet_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return MessageResponse(message="Sheet and all related data deleted successfully")


@router.get("/{sheet_id}/data", response_model=SheetData)
async def get_sheet_data(
    sheet_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SheetData:
    """Every owner's rows: administrator rows first, then each agent's rows oldest first."""
    try:
        return await CellService(db).get_sheet_data(sheet_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
