"""
farm_config -- single public entrypoint for access configuration.

Responsibility:
    Provides the way to obtain the static access policy at runtime through
    ``get_active_access_policy()``.  YAML loading and validation live in
    ``farm_config.loader`` and ``farm_config.compiler``.

Architecture position:
    Configuration.  This package sits above ``farm_kernel`` and below
    ``farm_services`` / ``farm_modules``.  The kernel never imports from
    ``farm_config``; the compiler translates YAML into the kernel's
    ``AccessPolicy``.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``AccessPolicyError`` -- schema or structural validation failures.

Audit relevance:
    Every compilation emits an ``ACCESS_CONFIG_TRACE`` log entry carrying
    the config_id, version, checksum, role count and route count.
"""

from __future__ import annotations

import functools
from pathlib import Path

from farm_config.compiler import compile_access_policy
from farm_config.loader import load_access_configuration
from farm_kernel.domain.permissions import AccessPolicy
from farm_kernel.logging_config import get_logger

_logger = get_logger("config")

_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"
_POLICY_FILE = "access.yaml"


def load_access_policy(path: Path | str) -> AccessPolicy:
    """Load, validate and compile the access policy at ``path``. Not cached."""
    config_set = load_access_configuration(Path(path))
    policy = compile_access_policy(config_set)

    _logger.info(
        "ACCESS_CONFIG_TRACE",
        extra={
            "trace_type": "ACCESS_CONFIG_TRACE",
            "config_set_id": config_set.config_id,
            "config_set_version": config_set.version,
            "checksum": config_set.checksum,
            "config_source": config_set.source,
            "role_count": len(policy.role_rules),
            "route_count": len(policy.route_roles),
        },
    )
    return policy


@functools.lru_cache(maxsize=None)
def get_active_access_policy(config_set: str = "default") -> AccessPolicy:
    """
    The access policy for the named configuration set under ``sets/``.

    Memoised per set name; call ``get_active_access_policy.cache_clear()``
    after editing the YAML in a long-running process.
    """
    return load_access_policy(_DEFAULT_CONFIG_DIR / config_set / _POLICY_FILE)


__all__ = ["get_active_access_policy", "load_access_policy"]
