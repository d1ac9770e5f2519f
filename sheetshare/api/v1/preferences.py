from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode, handle_auth_error
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_admin
from sheetshare.models.principal import Principal
from sheetshare.models.view_preference import ViewPreferenceRead, ViewPreferenceUpdate, ViewType
from sheetshare.repos import ViewPreferenceRepository

router = APIRouter(tags=["view-preference"])


@router.get("/", response_model=ViewPreferenceRead)
async def get_view_preference(
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ViewPreferenceRead:
    preference = await ViewPreferenceRepository(db).get_or_create(principal.id)
    await db.commit()
    return ViewPreferenceRead(view_type=preference.view_type)


@router.post("/", response_model=ViewPreferenceRead)
async def set_view_preference(
    data: ViewPreferenceUpdate,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ViewPreferenceRead:
    if data.view_type not in {v.value for v in ViewType}:
        raise handle_auth_error(
            ErrCode.INVALID_REQUEST.with_messages("Invalid view_type. Must be 0 (card) or 1 (table)")
        )
    preference = await ViewPreferenceRepository(db).set_view_type(principal.id, data.view_type)
    await db.commit()
    return ViewPreferenceRead(view_type=preference.view_type)
