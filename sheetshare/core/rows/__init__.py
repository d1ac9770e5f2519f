from .reconcile import (
    ADMIN_USERNAME,
    UNKNOWN_USERNAME,
    CellValue,
    Row,
    attach_usernames,
    group_cells,
    owner_ids,
    row_sort_key,
)
from .schemas import CellValueRead, RowRead

__all__ = [
    "ADMIN_USERNAME",
    "CellValue",
    "CellValueRead",
    "Row",
    "RowRead",
    "UNKNOWN_USERNAME",
    "attach_usernames",
    "group_cells",
    "owner_ids",
    "row_sort_key",
]
