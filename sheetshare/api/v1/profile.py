from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCodeError, handle_auth_error
from sheetshare.core.users import UserService
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_agent
from sheetshare.models.principal import Principal
from sheetshare.models.user import ProfileRead, ProfileUpdate, UsernameAvailability, UsernameCheck

router = APIRouter(tags=["agent-profile"])
username_router = APIRouter(tags=["users"])


class ProfileResponse(BaseModel):
    user: ProfileRead


class ProfileUpdateResponse(ProfileResponse):
    message: str


@router.get("/", response_model=ProfileResponse)
async def get_profile(
    principal: Principal = Depends(require_agent),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """The calling agent's account with its administrator's name."""
    try:
        return ProfileResponse(user=await UserService(db).get_profile(principal))
    except ErrCodeError as e:
        raise handle_auth_error(e)


@router.patch("/", response_model=ProfileUpdateResponse)
async def update_profile(
    data: ProfileUpdate,
    principal: Principal = Depends(require_agent),
    db: AsyncSession = Depends(get_session),
) -> ProfileUpdateResponse:
    try:
        profile = await UserService(db).update_profile(principal, data.username)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return ProfileUpdateResponse(message="Profile updated successfully", user=profile)


@username_router.post("/", response_model=UsernameAvailability)
async def check_username(
    data: UsernameCheck,
    db: AsyncSession = Depends(get_session),
) -> UsernameAvailability:
    """Whether a username is already registered. Used before sign-up, so unauthenticated."""
    try:
        return UsernameAvailability(exists=await UserService(db).username_exists(data.username))
    except ErrCodeError as e:
        raise handle_auth_error(e)
