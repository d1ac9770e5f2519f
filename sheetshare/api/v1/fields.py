from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCodeError, handle_auth_error
from sheetshare.core.sheets import FieldService
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_admin
from sheetshare.models.field import SheetFieldCreate, SheetFieldRead, SheetFieldUpdate
from sheetshare.models.principal import Principal

router = APIRouter(tags=["fields"])


class MessageResponse(BaseModel):
    message: str


@router.get("/", response_model=list[SheetFieldRead])
async def list_fields(
    sheet_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> list[SheetFieldRead]:
    try:
        return await FieldService(db).list_fields(sheet_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.post("/", response_model=SheetFieldRead, status_code=201)
async def create_field(
    data: SheetFieldCreate,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SheetFieldRead:
    try:
        return await FieldService(db).create_field(principal, data)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.patch("/{field_id}", response_model=SheetFieldRead)
async def update_field(
    field_id: int,
    data: SheetFieldUpdate,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SheetFieldRead:
    try:
        return await FieldService(db).update_field(field_id, principal, data)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.delete("/{field_id}", response_model=MessageResponse)
async def delete_field(
    field_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Delete a field and all cell data written to it."""
    try:
        await FieldService(db).delete_field(field_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return MessageResponse(message="Field and all related cell data deleted successfully")
