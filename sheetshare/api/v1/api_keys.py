import logging
from uuid import uuid4

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.infra.database import get_session
from sheetshare.middleware.auth import require_admin
from sheetshare.models.api_key import ApiKeyRead
from sheetshare.models.principal import Principal
from sheetshare.repos import ApiKeyRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["apikey"])


@router.get("/", response_model=ApiKeyRead)
async def get_api_key(
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ApiKeyRead:
    record = await ApiKeyRepository(db).get_by_customer(principal.id)
    return ApiKeyRead(api_key=record.api_key if record else None, customer_id=principal.id)


@router.post("/", response_model=ApiKeyRead)
async def regenerate_api_key(
    principal: Principal = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ApiKeyRead:
    """Issue a new API key, replacing any previous one."""
    record = await ApiKeyRepository(db).set_key(principal.id, str(uuid4()))
    await db.commit()
    logger.info(f"API key regenerated for customer {principal.id}")
    return ApiKeyRead(api_key=record.api_key, customer_id=principal.id)
