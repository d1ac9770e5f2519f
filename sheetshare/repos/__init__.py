from .api_key import ApiKeyRepository
from .cell import CellRepository
from .field import FieldRepository
from .share import ShareRepository
from .sheet import SheetRepository
from .user import UserRepository
from .view_preference import ViewPreferenceRepository

__all__ = [
    "ApiKeyRepository",
    "CellRepository",
    "FieldRepository",
    "ShareRepository",
    "SheetRepository",
    "UserRepository",
    "ViewPreferenceRepository",
]
