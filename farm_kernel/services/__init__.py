"""Kernel services."""

from farm_kernel.services.permission_cache import MISS, PermissionCache
from farm_kernel.services.permission_resolver import (
    AccessSource,
    ModuleAccess,
    PermissionResolver,
)

__all__ = [
    "AccessSource",
    "MISS",
    "ModuleAccess",
    "PermissionCache",
    "PermissionResolver",
]
