"""Machine-readable error codes raised by services and mapped to HTTP by handlers."""

from __future__ import annotations

from enum import IntEnum

from fastapi import HTTPException


class ErrCode(IntEnum):
    # Generic
    UNKNOWN_ERROR = 1000
    INTERNAL_SERVER_ERROR = 1001
    SERVICE_UNAVAILABLE = 1002
    INVALID_REQUEST = 1003

    # Authentication
    AUTHENTICATION_REQUIRED = 2000
    INVALID_TOKEN = 2001
    TOKEN_EXPIRED = 2002
    INVALID_API_KEY = 2003
    ADMIN_REQUIRED = 2004
    AGENT_REQUIRED = 2005

    # Sheets
    SHEET_NOT_FOUND = 3000
    SHEET_ALREADY_EXISTS = 3001
    SHEET_NOT_DESIGNED = 3002

    # Fields
    FIELD_NOT_FOUND = 4000

    # Cells and rows
    ROW_ACCESS_DENIED = 5000
    STATIC_FIELD_LOCKED = 5001
    CELL_WRITE_CONFLICT = 5002

    # Sharing
    SHARE_ALREADY_EXISTS = 6000

    # Users
    USER_NOT_FOUND = 7000
    USERNAME_TAKEN = 7001

    def with_messages(self, *messages: str) -> "ErrCodeError":
        return ErrCodeError(self, messages)

    def with_errors(self, *errors: BaseException) -> "ErrCodeError":
        return ErrCodeError(self, tuple(str(err) for err in errors if err))


class ErrCodeError(Exception):
    def __init__(self, code: ErrCode, messages: tuple[str, ...] = ()) -> None:
        self.code = code
        self.messages = tuple(msg for msg in messages if msg)
        super().__init__(self._format())

    def _format(self) -> str:
        head = f"{self.code.name}({self.code.value})"
        if not self.messages:
            return head
        return f"{head}: {'; '.join(self.messages)}"

    def as_dict(self) -> dict[str, object]:
        if not self.messages:
            return {"msg": self.code.name.replace("_", " ").title(), "info": []}
        primary, *rest = self.messages
        body: dict[str, object] = {"msg": primary}
        if rest:
            body["info"] = rest
        return body


_STATUS_MAP: dict[ErrCode, int] = {
    ErrCode.INVALID_REQUEST: 400,
    ErrCode.SHEET_NOT_DESIGNED: 400,
    ErrCode.USERNAME_TAKEN: 400,
    ErrCode.AUTHENTICATION_REQUIRED: 401,
    ErrCode.INVALID_TOKEN: 401,
    ErrCode.TOKEN_EXPIRED: 401,
    ErrCode.INVALID_API_KEY: 401,
    ErrCode.ADMIN_REQUIRED: 403,
    ErrCode.AGENT_REQUIRED: 403,
    ErrCode.ROW_ACCESS_DENIED: 403,
    ErrCode.STATIC_FIELD_LOCKED: 403,
    ErrCode.SHEET_NOT_FOUND: 404,
    ErrCode.FIELD_NOT_FOUND: 404,
    ErrCode.USER_NOT_FOUND: 404,
    ErrCode.SHEET_ALREADY_EXISTS: 409,
    ErrCode.SHARE_ALREADY_EXISTS: 409,
    ErrCode.CELL_WRITE_CONFLICT: 409,
    ErrCode.SERVICE_UNAVAILABLE: 503,
}


def handle_auth_error(error: ErrCodeError) -> HTTPException:
    """Translate an ErrCodeError into the HTTPException a handler should raise."""
    status_code = _STATUS_MAP.get(error.code, 500)
    return HTTPException(status_code=status_code, detail=error.as_dict())
