from .fields import FieldService
from .service import SheetService
from .shares import ShareService

__all__ = ["FieldService", "SheetService", "ShareService"]
