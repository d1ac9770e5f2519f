from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCodeError, handle_auth_error
from sheetshare.core.users import UserService
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_admin
from sheetshare.models.principal import Principal
from sheetshare.models.user import UserRead, UserUpdate

router = APIRouter(tags=["users"])


class MessageResponse(BaseModel):
    success: bool = True
    message: str


@router.get("/", response_model=list[UserRead])
async def list_users(
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> list[UserRead]:
    """Agents registered under the current administrator, by username."""
    return await UserService(db).list_users(principal)


@router.patch("/{user_id}", response_model=MessageResponse)
async def update_user_status(
    user_id: int,
    data: UserUpdate,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    try:
        await UserService(db).set_active(user_id, principal, data.is_active)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return MessageResponse(message=f"User {'activated' if data.is_active else 'deactivated'} successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Delete an agent and its sharing grants. Rows the agent wrote are kept."""
    try:
        await UserService(db).delete_user(user_id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return MessageResponse(message="User deleted successfully")
