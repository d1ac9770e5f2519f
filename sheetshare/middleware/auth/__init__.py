"""
Principal resolution for authenticated requests.

Bearer tokens are issued by the sign-in service and carry ``userId`` and
``role`` claims. The token is read from the ``Authorization`` header, falling
back to the ``token`` cookie set by the web client.
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from sheetshare.common.code import ErrCode, ErrCodeError, handle_auth_error
from sheetshare.configs import configs
from sheetshare.models.principal import Principal, Role

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)

TOKEN_COOKIE = "token"


def decode_principal(token: str) -> Principal:
    try:
        claims = jwt.decode(token, configs.Auth.JwtSecret, algorithms=[configs.Auth.JwtAlgorithm])
    except ExpiredSignatureError:
        raise ErrCode.TOKEN_EXPIRED.with_messages("Token has expired") from None
    except JWTError as e:
        raise ErrCode.INVALID_TOKEN.with_errors(e) from e

    user_id = claims.get("userId")
    if not isinstance(user_id, int):
        raise ErrCode.INVALID_TOKEN.with_messages("Token is missing userId")

    # Tokens minted without a role belong to agents
    try:
        role = Role(claims.get("role") or Role.AGENT)
    except ValueError:
        raise ErrCode.INVALID_TOKEN.with_messages(f"Unknown role {claims.get('role')!r}") from None
    return Principal(id=user_id, role=role)


async def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal:
    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    if not token:
        raise handle_auth_error(ErrCode.AUTHENTICATION_REQUIRED.with_messages("Unauthorized"))
    try:
        return decode_principal(token)
    except ErrCodeError as e:
        logger.debug(f"Rejected credential: {e}")
        raise handle_auth_error(e)


async def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != Role.ADMIN:
        raise handle_auth_error(ErrCode.ADMIN_REQUIRED.with_messages("Access denied. Admin only."))
    return principal


async def require_agent(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != Role.AGENT:
        raise handle_auth_error(ErrCode.AGENT_REQUIRED.with_messages("Access denied. Agent only."))
    return principal


__all__ = ["decode_principal", "get_current_principal", "require_admin", "require_agent"]
