"""
PermissionResolver -- static rules plus per-role dynamic overrides.

Responsibility:
    Answer "may this role view this module?" for custom roles that the
    compiled route map does not know about, by consulting the dynamic
    ``role_permissions`` store and falling back to the static rules.

Architecture position:
    Kernel > Services.  Receives its store, compiled AccessPolicy and
    optional PermissionCache by constructor injection.  Route guards and
    menu filters (farm_services.access_guard) compose it with the static
    fast path.

Invariants enforced:
    - A matching override row wins verbatim, including can_view=False.
    - No row, or any store failure, yields can_access_route(role, path).
    - Store failures are logged and never propagated: the resolver fails
      closed to the static rules.

Failure modes:
    - None surfaced.  Every exception raised by the store (typically
      PermissionStoreError or SQLAlchemyError) is logged and caught here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from farm_kernel.domain.permissions import (
    AccessPolicy,
    can_access_route,
    has_permission,
    is_super_admin,
)
from farm_kernel.domain.roles import RoleLike, role_name
from farm_kernel.logging_config import get_logger
from farm_kernel.selectors.permission_selector import (
    DynamicPermissionRecord,
    DynamicPermissionStore,
)
from farm_kernel.services.permission_cache import MISS, PermissionCache

logger = get_logger("services.permission_resolver")


class AccessSource(str, Enum):
    """Which tier produced an access decision."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ModuleAccess:
    allowed: bool
    source: AccessSource


class PermissionResolver:
    """
    Two-source permission resolution.

    Contract:
        ``can_access_module`` never raises.  With a cache, the role's full
        override map is fetched once per TTL and reused for every module;
        without one, each call queries the single (role, module) row.
    """

    def __init__(
        self,
        store: DynamicPermissionStore,
        policy: AccessPolicy,
        cache: PermissionCache | None = None,
    ):
        self._store = store
        self._policy = policy
        self._cache = cache

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    # Static checks

    def has_permission(self, role: RoleLike | None, resource: str, action: str) -> bool:
        return has_permission(role, resource, action, self._policy)

    def can_access_route(self, role: RoleLike | None, route: str) -> bool:
        return can_access_route(role, route, self._policy)

    def is_super_admin(self, role: RoleLike | None) -> bool:
        return is_super_admin(role)

    # Dynamic checks

    def fetch_dynamic_permissions(self, role: RoleLike | None) -> list[DynamicPermissionRecord]:
        """All override rows for the role; [] when none or on store failure."""
        name = role_name(role)
        if not name:
            return []
        try:
            return list(self._role_overrides(name).values())
        except Exception:
            logger.warning(
                "dynamic_permissions_fetch_failed",
                extra={"role": name},
                exc_info=True,
            )
            return []

    def resolve_module(self, role: RoleLike | None, module_path: str) -> ModuleAccess:
        """Override row if present, else the static route rule."""
        name = role_name(role)
        if not name:
            return ModuleAccess(False, AccessSource.FALLBACK)

        try:
            record = self._lookup(name, module_path)
        except Exception:
            logger.warning(
                "dynamic_permission_lookup_failed",
                extra={"role": name, "module_path": module_path},
                exc_info=True,
            )
            record = None

        if record is not None:
            logger.debug(
                "dynamic_permission_applied",
                extra={
                    "role": name,
                    "module_path": module_path,
                    "can_view": record.can_view,
                },
            )
            return ModuleAccess(record.can_view is True, AccessSource.DYNAMIC)

        return ModuleAccess(
            can_access_route(name, module_path, self._policy),
            AccessSource.FALLBACK,
        )

    def can_access_module(self, role: RoleLike | None, module_path: str) -> bool:
        return self.resolve_module(role, module_path).allowed

    def invalidate(self, role: RoleLike) -> None:
        """Drop cached overrides after an administrator edits the role."""
        name = role_name(role)
        if self._cache is not None and name:
            self._cache.invalidate(name)

    # Internal

    def _lookup(self, name: str, module_path: str) -> DynamicPermissionRecord | None:
        if self._cache is None:
            return self._store.module_permission(name, module_path)
        return self._role_overrides(name).get(module_path)

    def _role_overrides(self, name: str) -> dict[str, DynamicPermissionRecord]:
        if self._cache is not None:
            cached = self._cache.get(name)
            if cached is not MISS:
                return cached

        overrides = {
            record.module_path: record
            for record in self._store.role_permissions(name)
        }

        if self._cache is not None:
            self._cache.set(name, overrides, self._policy.cache_ttl_seconds)
        return overrides
