from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.common.code import ErrCodeError, handle_auth_error
from sheetshare.core.export import CustomerExport, ExportService
from sheetshare.infra.database import get_session

router = APIRouter(tags=["external"])


@router.get("/", response_model=CustomerExport)
async def get_customer_rows(
    customer_id: str | None = None,
    apikey: str | None = None,
    db: AsyncSession = Depends(get_session),
) -> CustomerExport:
    """All rows of every sheet owned by the customer, keyed by column title."""
    try:
        return await ExportService(db).export_customer(customer_id, apikey)
    except ErrCodeError as e:
        raise handle_auth_error(e)
