from .service import CellService, SheetData

__all__ = ["CellService", "SheetData"]
