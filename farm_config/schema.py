"""
Access configuration schema (``farm_config.schema``).

Human-authored source artifacts parsed from YAML.  Every definition is a
frozen dataclass; ``farm_config.compiler`` validates them and produces the
kernel's ``AccessPolicy``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PermissionRuleDef:
    """Actions allowed on one resource; '*' is the wildcard for either."""

    resource: str
    actions: tuple[str, ...]


@dataclass(frozen=True)
class RoleDef:
    """A built-in role and its static rules."""

    name: str
    rules: tuple[PermissionRuleDef, ...]


@dataclass(frozen=True)
class RouteDef:
    """An admin route and the roles allowed to open it."""

    path: str
    roles: tuple[str, ...]


@dataclass(frozen=True)
class MenuItemDef:
    path: str
    label: str


@dataclass(frozen=True)
class AccessSettingsDef:
    super_admin_role: str = "Super Admin"
    cache_ttl_seconds: int = 300
    edit_window_minutes: int = 30


@dataclass(frozen=True)
class AccessConfigurationSet:
    """
    One complete access configuration as authored.

    Attributes:
        config_id: Identifier of the configuration set.
        version: Monotonic version number.
        checksum: SHA-256 of the canonical serialization of the source.
        source: File the set was loaded from.
    """

    config_id: str
    version: int
    roles: tuple[RoleDef, ...]
    routes: tuple[RouteDef, ...]
    menu: tuple[MenuItemDef, ...] = ()
    settings: AccessSettingsDef = field(default_factory=AccessSettingsDef)
    checksum: str = ""
    source: str = "<inline>"
