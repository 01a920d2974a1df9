"""
farm_services.access_guard -- Route guard, menu filter and edit locks.

Responsibility:
    Compose the two permission tiers the admin console needs: the static
    route map first, then per-role overrides from ``role_permissions`` for
    roles the static map does not grant.  Also gates action buttons and the
    time-boxed edit window on freshly created records.

Architecture position:
    Services layer.  Consumes the compiled ``AccessPolicy`` from farm_config
    and a kernel ``PermissionResolver``.  The caller supplies the role; this
    module does not resolve identity.

Invariants:
    - A static grant never touches the permission store.
    - Fail closed: a store failure degrades to the static answer, never to
      an unconditional allow.
    - Super admins may edit any record regardless of age.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from farm_config import get_active_access_policy
from farm_kernel.domain import permissions as static_rules
from farm_kernel.domain.clock import Clock, SystemClock
from farm_kernel.domain.permissions import AccessPolicy, MenuItem
from farm_kernel.domain.roles import RoleLike, role_name
from farm_kernel.logging_config import get_logger
from farm_kernel.selectors.permission_selector import PermissionSelector
from farm_kernel.services.permission_cache import PermissionCache
from farm_kernel.services.permission_resolver import AccessSource, PermissionResolver

logger = get_logger("services.access_guard")


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    source: AccessSource

    def __bool__(self) -> bool:
        return self.allowed


class AccessGuard:
    """
    Access checks for one request context.

    Contract:
        ``check_route`` and ``visible_menu`` never raise for store failures.
        ``can_edit_record`` measures age on the injected clock.
    """

    def __init__(
        self,
        resolver: PermissionResolver,
        clock: Clock | None = None,
    ):
        self._resolver = resolver
        self._clock = clock or SystemClock()

    @classmethod
    def from_session(
        cls,
        session: Session,
        policy: AccessPolicy | None = None,
        clock: Clock | None = None,
        cache: PermissionCache | None = None,
    ) -> AccessGuard:
        """Guard backed by the ``role_permissions`` table on ``session``."""
        clock = clock or SystemClock()
        policy = policy or get_active_access_policy()
        resolver = PermissionResolver(
            PermissionSelector(session),
            policy,
            cache if cache is not None else PermissionCache(clock, policy.cache_ttl_seconds),
        )
        return cls(resolver, clock)

    @property
    def policy(self) -> AccessPolicy:
        return self._resolver.policy

    def check_route(self, role: RoleLike | None, path: str) -> AccessDecision:
        """Static route map first; overrides only for roles it does not grant."""
        if self._resolver.can_access_route(role, path):
            return AccessDecision(True, AccessSource.STATIC)

        access = self._resolver.resolve_module(role, path)
        if not access.allowed:
            logger.info(
                "route_access_denied",
                extra={
                    "role": role_name(role),
                    "route": path,
                    "decision_source": access.source.value,
                },
            )
        return AccessDecision(access.allowed, access.source)

    def visible_menu(self, role: RoleLike | None) -> tuple[MenuItem, ...]:
        """Menu entries the role may open, in declared order."""
        return tuple(
            item for item in self.policy.menu if self.check_route(role, item.path).allowed
        )

    def can_perform(self, role: RoleLike | None, resource: str, action: str) -> bool:
        """Gate for action buttons (create/update/delete/export)."""
        return self._resolver.has_permission(role, resource, action)

    def can_edit_record(self, role: RoleLike | None, created_at: datetime) -> bool:
        """
        Records are editable for ``edit_window_minutes`` after creation.

        Naive timestamps, from the record or the clock, are treated as UTC.
        """
        if self._resolver.is_super_admin(role):
            return True

        window = timedelta(minutes=self.policy.edit_window_minutes)
        return _as_utc(self._clock.now()) - _as_utc(created_at) <= window


# ---------------------------------------------------------------------------
# Static checks bound to the active policy
# ---------------------------------------------------------------------------


def has_permission(
    role: RoleLike | None,
    resource: str,
    action: str,
    policy: AccessPolicy | None = None,
) -> bool:
    return static_rules.has_permission(
        role, resource, action, policy or get_active_access_policy(),
    )


def can_access_route(
    role: RoleLike | None,
    route: str,
    policy: AccessPolicy | None = None,
) -> bool:
    return static_rules.can_access_route(role, route, policy or get_active_access_policy())


def is_super_admin(role: RoleLike | None) -> bool:
    return static_rules.is_super_admin(role)
