from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCodeError, handle_auth_error
from sheetshare.core.sheets import ShareService
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_admin
from sheetshare.models.principal import Principal
from sheetshare.models.share import ShareGrantCreate, ShareGrantRead

router = APIRouter(tags=["shares"])


class SuccessResponse(BaseModel):
    success: bool = True


@router.get("/", response_model=list[ShareGrantRead])
async def list_grants(
    sheet_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> list[ShareGrantRead]:
    try:
        return await ShareService(db).list_grants(sheet_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.post("/", response_model=ShareGrantRead, status_code=201)
async def grant_share(
    data: ShareGrantCreate,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ShareGrantRead:
    try:
        return await ShareService(db).grant(principal, data)
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.delete("/", response_model=SuccessResponse)
async def revoke_share(
    sheet_id: int,
    user_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    try:
        await ShareService(db).revoke(sheet_id, user_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return SuccessResponse()
