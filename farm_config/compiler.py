"""
Access Policy Compiler (``farm_config.compiler``).

Responsibility
--------------
Validates an ``AccessConfigurationSet`` and compiles it into the kernel's
frozen ``AccessPolicy``.  The kernel never sees the YAML schema; this is the
only bridge between the two.

Validation rules
----------------
* Role names are unique; the configured super admin role is declared.
* Route paths start with ``/`` and only name declared roles.
* Every menu entry points at a declared route.
* ``cache_ttl_seconds`` is >= 0 and ``edit_window_minutes`` is > 0.

All violations are collected and raised together as one ``AccessPolicyError``.
"""

from __future__ import annotations

from types import MappingProxyType

from farm_config.schema import AccessConfigurationSet
from farm_kernel.domain.permissions import AccessPolicy, MenuItem, RolePermissionRule
from farm_kernel.exceptions import AccessPolicyError


def validate_access_configuration(config_set: AccessConfigurationSet) -> list[str]:
    """Return every validation error in ``config_set`` (empty when valid)."""
    errors: list[str] = []

    role_names = [role.name for role in config_set.roles]
    seen: set[str] = set()
    for name in role_names:
        if name in seen:
            errors.append(f"duplicate role {name!r}")
        seen.add(name)

    if config_set.settings.super_admin_role not in seen:
        errors.append(
            f"super admin role {config_set.settings.super_admin_role!r} is not declared"
        )

    for role in config_set.roles:
        for rule in role.rules:
            if not rule.actions:
                errors.append(f"role {role.name!r} rule on {rule.resource!r} has no actions")

    route_paths: set[str] = set()
    for route in config_set.routes:
        if not route.path.startswith("/"):
            errors.append(f"route {route.path!r} must start with '/'")
        route_paths.add(route.path)
        for name in route.roles:
            if name not in seen:
                errors.append(f"route {route.path!r} names undeclared role {name!r}")

    for item in config_set.menu:
        if item.path not in route_paths:
            errors.append(f"menu entry {item.label!r} points at undeclared route {item.path!r}")

    if config_set.settings.cache_ttl_seconds < 0:
        errors.append("cache_ttl_seconds must be >= 0")
    if config_set.settings.edit_window_minutes <= 0:
        errors.append("edit_window_minutes must be > 0")

    return errors


def compile_access_policy(config_set: AccessConfigurationSet) -> AccessPolicy:
    """
    Compile a validated configuration set into an ``AccessPolicy``.

    Raises:
        AccessPolicyError: if ``validate_access_configuration`` reports errors.
    """
    errors = validate_access_configuration(config_set)
    if errors:
        raise AccessPolicyError(config_set.source, "; ".join(errors))

    role_rules = {
        role.name: tuple(
            RolePermissionRule(resource=rule.resource, actions=frozenset(rule.actions))
            for rule in role.rules
        )
        for role in config_set.roles
    }
    route_roles = {
        route.path: frozenset(route.roles) for route in config_set.routes
    }

    return AccessPolicy(
        role_rules=MappingProxyType(role_rules),
        route_roles=MappingProxyType(route_roles),
        menu=tuple(MenuItem(path=m.path, label=m.label) for m in config_set.menu),
        super_admin_role=config_set.settings.super_admin_role,
        cache_ttl_seconds=config_set.settings.cache_ttl_seconds,
        edit_window_minutes=config_set.settings.edit_window_minutes,
        source=config_set.source,
    )
