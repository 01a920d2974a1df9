"""Pure domain layer: roles, static permissions, ledger balances, clocks."""

from farm_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from farm_kernel.domain.ledger import (
    EntryTotals,
    JournalLineData,
    LedgerResult,
    RunningBalanceRow,
    build_ledger,
    check_entry_balanced,
    compute_account_balance,
    compute_opening_balance,
    signed_contribution,
)
from farm_kernel.domain.permissions import (
    AccessPolicy,
    MenuItem,
    RolePermissionRule,
    can_access_route,
    has_permission,
    is_super_admin,
)
from farm_kernel.domain.roles import BuiltinRole, CustomRole, parse_role, role_name

__all__ = [
    "AccessPolicy",
    "BuiltinRole",
    "Clock",
    "CustomRole",
    "DeterministicClock",
    "EntryTotals",
    "JournalLineData",
    "LedgerResult",
    "MenuItem",
    "RolePermissionRule",
    "RunningBalanceRow",
    "SystemClock",
    "build_ledger",
    "can_access_route",
    "check_entry_balanced",
    "compute_account_balance",
    "compute_opening_balance",
    "has_permission",
    "is_super_admin",
    "parse_role",
    "role_name",
    "signed_contribution",
]
