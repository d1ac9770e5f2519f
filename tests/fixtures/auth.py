from typing import Callable

import pytest
from jose import jwt

from sheetshare.configs import configs
from sheetshare.models.principal import Role


def make_token(user_id: int, role: Role | str | None = Role.ADMIN, **claims: object) -> str:
    payload: dict[str, object] = {"userId": user_id, **claims}
    if role is not None:
        payload["role"] = str(role)
    return jwt.encode(payload, configs.Auth.JwtSecret, algorithm=configs.Auth.JwtAlgorithm)


def bearer(user_id: int, role: Role = Role.ADMIN) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, role)}"}


@pytest.fixture
def admin_headers() -> Callable[[int], dict[str, str]]:
    return lambda user_id: bearer(user_id, Role.ADMIN)


@pytest.fixture
def agent_headers() -> Callable[[int], dict[str, str]]:
    return lambda user_id: bearer(user_id, Role.AGENT)
