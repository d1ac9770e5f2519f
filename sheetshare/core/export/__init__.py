from .service import CustomerExport, ExportService, SheetExport, flatten_row

__all__ = ["CustomerExport", "ExportService", "SheetExport", "flatten_row"]
