"""
Static permission rules -- pure access decisions with zero I/O.

Responsibility:
    Decide allow/deny from a compiled ``AccessPolicy``: role -> resource ->
    action rules for action buttons, and route -> allowed roles for pages
    and menu entries.

Architecture position:
    Kernel > Domain.  The policy itself is built by ``farm_config`` and
    passed in; this module never reads configuration.

Invariants enforced:
    - A role holding the rule ``{resource: '*', actions: {'*'}}`` is allowed
      every resource/action pair.
    - Routes absent from the route map are denied to every role.
    - Unknown roles are denied.  Nothing here raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from farm_kernel.domain.roles import SUPER_ADMIN_ROLE_NAME, RoleLike, role_name

WILDCARD = "*"


@dataclass(frozen=True)
class RolePermissionRule:
    """Actions a role may perform on one resource ('*' matches any)."""

    resource: str
    actions: frozenset[str]

    @property
    def is_unrestricted(self) -> bool:
        return self.resource == WILDCARD and WILDCARD in self.actions

    def matches(self, resource: str, action: str) -> bool:
        return (
            (self.resource == resource or self.resource == WILDCARD)
            and (action in self.actions or WILDCARD in self.actions)
        )


@dataclass(frozen=True)
class MenuItem:
    """An admin navigation entry, gated by its route path."""

    path: str
    label: str


@dataclass(frozen=True)
class AccessPolicy:
    """
    Compiled static access policy.

    ``role_rules`` and ``route_roles`` are keyed by role name / route path.
    """

    role_rules: Mapping[str, tuple[RolePermissionRule, ...]]
    route_roles: Mapping[str, frozenset[str]]
    menu: tuple[MenuItem, ...] = ()
    super_admin_role: str = SUPER_ADMIN_ROLE_NAME
    cache_ttl_seconds: int = 300
    edit_window_minutes: int = 30
    source: str = field(default="<inline>", compare=False)

    def rules_for(self, role: RoleLike | None) -> tuple[RolePermissionRule, ...]:
        name = role_name(role)
        if name is None:
            return ()
        return self.role_rules.get(name, ())

    def roles_for_route(self, route: str) -> frozenset[str]:
        return self.route_roles.get(route, frozenset())


def has_permission(
    role: RoleLike | None,
    resource: str,
    action: str,
    policy: AccessPolicy,
) -> bool:
    """True if the role has a rule matching both resource and action."""
    rules = policy.rules_for(role)

    if any(rule.is_unrestricted for rule in rules):
        return True

    return any(rule.matches(resource, action) for rule in rules)


def can_access_route(
    role: RoleLike | None,
    route: str,
    policy: AccessPolicy,
) -> bool:
    """
    Static, default-deny route check.

    Looks only at the compiled route map for the exact path; custom-role
    overrides are the resolver's job (PermissionResolver.can_access_module).
    """
    name = role_name(role)
    if name is None:
        return False
    return name in policy.roles_for_route(route)


def is_super_admin(role: RoleLike | None) -> bool:
    """Case-insensitive match on 'Super Admin' (covers a custom role of that name)."""
    name = role_name(role)
    if not name:
        return False
    return name == SUPER_ADMIN_ROLE_NAME or name.lower() == SUPER_ADMIN_ROLE_NAME.lower()
