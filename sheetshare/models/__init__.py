from .api_key import ApiKey
from .cell import Cell
from .field import SheetField
from .share import ShareGrant
from .sheet import Sheet
from .user import User
from .view_preference import ViewPreference

__all__ = [
    "ApiKey",
    "Cell",
    "Sheet",
    "SheetField",
    "ShareGrant",
    "User",
    "ViewPreference",
]
