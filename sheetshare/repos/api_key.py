from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.models.api_key import ApiKey


class ApiKeyRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_customer(self, customer_id: int) -> ApiKey | None:
        stmt = select(ApiKey).where(ApiKey.customer_id == customer_id)
        result = await self.db.exec(stmt)
        return result.first()

    async def verify(self, customer_id: int, api_key: str) -> bool:
        stmt = select(ApiKey).where(ApiKey.customer_id == customer_id, ApiKey.api_key == api_key)
        result = await self.db.exec(stmt)
        return result.first() is not None

    async def set_key(self, customer_id: int, api_key: str) -> ApiKey:
        record = await self.get_by_customer(customer_id)
        if record:
            record.api_key = api_key
        else:
            record = ApiKey(customer_id=customer_id, api_key=api_key)
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        return record
