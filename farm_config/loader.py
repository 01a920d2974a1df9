"""
Configuration Loader (``farm_config.loader``).

Responsibility
--------------
Loads access configuration YAML files and parses them into the frozen
``farm_config.schema`` dataclasses.  Runtime callers go through
``farm_config.get_active_access_policy()`` instead.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing or mistyped keys  -> ``AccessPolicyError`` naming the source file.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from farm_config.schema import (
    AccessConfigurationSet,
    AccessSettingsDef,
    MenuItemDef,
    PermissionRuleDef,
    RoleDef,
    RouteDef,
)
from farm_kernel.exceptions import AccessPolicyError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _str_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value or ())


def parse_rule(data: dict[str, Any]) -> PermissionRuleDef:
    return PermissionRuleDef(
        resource=str(data["resource"]),
        actions=_str_tuple(data["actions"]),
    )


def parse_role(data: dict[str, Any]) -> RoleDef:
    return RoleDef(
        name=str(data["name"]),
        rules=tuple(parse_rule(r) for r in data.get("rules", ())),
    )


def parse_routes(data: dict[str, Any]) -> tuple[RouteDef, ...]:
    """Routes are authored as a mapping of path -> list of role names."""
    return tuple(
        RouteDef(path=str(path), roles=_str_tuple(roles))
        for path, roles in data.items()
    )


def parse_menu_item(data: dict[str, Any]) -> MenuItemDef:
    return MenuItemDef(path=str(data["path"]), label=str(data["label"]))


def parse_settings(data: dict[str, Any]) -> AccessSettingsDef:
    defaults = AccessSettingsDef()
    return AccessSettingsDef(
        super_admin_role=str(data.get("super_admin_role", defaults.super_admin_role)),
        cache_ttl_seconds=int(data.get("cache_ttl_seconds", defaults.cache_ttl_seconds)),
        edit_window_minutes=int(data.get("edit_window_minutes", defaults.edit_window_minutes)),
    )


def parse_access_configuration(
    data: dict[str, Any],
    source: str = "<inline>",
) -> AccessConfigurationSet:
    """
    Parse a whole access configuration document.

    Raises:
        AccessPolicyError: if a required key is missing or a value has the
            wrong shape.
    """
    try:
        return AccessConfigurationSet(
            config_id=str(data["config_id"]),
            version=int(data.get("version", 1)),
            roles=tuple(parse_role(r) for r in data["roles"]),
            routes=parse_routes(data.get("routes") or {}),
            menu=tuple(parse_menu_item(m) for m in data.get("menu") or ()),
            settings=parse_settings(data.get("settings") or {}),
            checksum=compute_checksum(data),
            source=source,
        )
    except KeyError as exc:
        raise AccessPolicyError(source, f"missing key {exc.args[0]!r}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise AccessPolicyError(source, str(exc)) from exc


def load_access_configuration(path: Path) -> AccessConfigurationSet:
    """Load and parse an access configuration YAML file."""
    return parse_access_configuration(load_yaml_file(path), source=str(path))
