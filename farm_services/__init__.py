"""
farm_services -- Package init and public API.

Responsibility:
    Request-scoped services that compose the kernel with database sessions,
    the active configuration and wall-clock time.

Architecture position:
    Services.

    Dependency direction:
        farm_services/ -> farm_modules/, farm_config/, farm_kernel/  (allowed)
        farm_kernel/   -> farm_services/                             (FORBIDDEN)
"""

from farm_services.access_guard import (
    AccessDecision,
    AccessGuard,
    can_access_route,
    has_permission,
    is_super_admin,
)

__all__ = [
    "AccessDecision",
    "AccessGuard",
    "can_access_route",
    "has_permission",
    "is_super_admin",
]
