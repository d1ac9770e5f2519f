"""Cell writes and row deletes for administrators and agents."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCode, ErrCodeError, handle_auth_error
from sheetshare.core.cells import CellService
from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_admin, require_agent
from sheetshare.models.cell import CellWrite, CellWriteResult
from sheetshare.models.principal import Principal

admin_router = APIRouter(tags=["cells"])
agent_router = APIRouter(tags=["cells"])


class CellWriteResponse(BaseModel):
    success: bool = True
    cell_id: int
    action: Literal["created", "updated"]

    @classmethod
    def from_result(cls, result: CellWriteResult) -> "CellWriteResponse":
        return cls(cell_id=result.cell_id, action="created" if result.was_created else "updated")


class SuccessResponse(BaseModel):
    success: bool = True


def parse_owner(owner_user_id: str | None) -> int | None:
    """Query-string owner: absent, empty or ``null`` selects the administrator's row."""
    if owner_user_id is None or owner_user_id in ("", "null"):
        return None
    try:
        return int(owner_user_id)
    except ValueError:
        raise ErrCode.INVALID_REQUEST.with_messages(f"Invalid owner_user_id {owner_user_id!r}") from None


@admin_router.post("/", response_model=CellWriteResponse)
async def write_admin_cell(
    data: CellWrite,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> CellWriteResponse:
    try:
        result = await CellService(db).write_cell(principal, data)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return CellWriteResponse.from_result(result)


@admin_router.delete("/", response_model=SuccessResponse)
async def delete_admin_row(
    sheet_id: int,
    row_key: str,
    owner_user_id: str | None = None,
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    """Delete one row of any owner on a sheet the administrator owns."""
    try:
        owner = parse_owner(owner_user_id)
        await CellService(db).delete_row(sheet_id, row_key, owner, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return SuccessResponse()


@agent_router.post("/", response_model=CellWriteResponse)
async def write_agent_cell(
    data: CellWrite,
    principal: Principal = Depends(require_agent),
    db: AsyncSession = Depends(get_session),
) -> CellWriteResponse:
    try:
        result = await CellService(db).write_cell(principal, data)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return CellWriteResponse.from_result(result)


@agent_router.delete("/", response_model=SuccessResponse)
async def delete_agent_row(
    sheet_id: int,
    row_key: str,
    principal: Principal = Depends(require_agent),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    """Delete one of the agent's own rows."""
    try:
        await CellService(db).delete_row(sheet_id, row_key, principal.id, principal)
    except ErrCodeError as e:
        raise handle_auth_error(e)
    return SuccessResponse()
