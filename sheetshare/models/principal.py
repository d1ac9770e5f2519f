"""
Resolved caller identity.

Not a database table: a Principal is built from verified bearer-token claims
and passed explicitly to the services and policies that need it.
"""

from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    ADMIN = "admin"
    AGENT = "agent"


@dataclass(frozen=True)
class Principal:
    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
