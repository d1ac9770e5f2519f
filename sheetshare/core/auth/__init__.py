from .policies.sheet_policy import SheetPolicy

__all__ = ["SheetPolicy"]
