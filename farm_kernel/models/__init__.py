"""ORM models for the farm kernel."""

from farm_kernel.models.account import (
    NORMAL_BALANCE_BY_TYPE,
    AccountType,
    ChartOfAccount,
    NormalBalance,
)
from farm_kernel.models.journal import JournalEntry, JournalEntryLine
from farm_kernel.models.role_permission import CustomRoleRecord, RolePermission

__all__ = [
    "AccountType",
    "ChartOfAccount",
    "CustomRoleRecord",
    "JournalEntry",
    "JournalEntryLine",
    "NORMAL_BALANCE_BY_TYPE",
    "NormalBalance",
    "RolePermission",
]
