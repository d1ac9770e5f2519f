from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sheetshare.models.principal import Principal

T = TypeVar("T")


class ResourcePolicyBase(ABC, Generic[T]):
    @abstractmethod
    async def authorize_read(self, resource_id: int, principal: Principal) -> T: ...

    @abstractmethod
    async def authorize_write(self, resource_id: int, principal: Principal) -> T: ...

    @abstractmethod
    async def authorize_delete(self, resource_id: int, principal: Principal) -> T: ...
