"""Selectors for the farm kernel (read side)."""

from farm_kernel.selectors.ledger_selector import LedgerSelector
from farm_kernel.selectors.permission_selector import (
    DynamicPermissionRecord,
    DynamicPermissionStore,
    PermissionSelector,
)

__all__ = [
    "DynamicPermissionRecord",
    "DynamicPermissionStore",
    "LedgerSelector",
    "PermissionSelector",
]
