"""
Short-lived in-memory cache for dynamic permission lookups.

The cache is an explicit object handed to PermissionResolver (never module
state), so each resolver -- and each test -- owns its own entries.  Expiry is
measured on an injected Clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Final

from farm_kernel.domain.clock import Clock, SystemClock
from farm_kernel.logging_config import get_logger

logger = get_logger("services.permission_cache")

DEFAULT_TTL_SECONDS: Final = 300


class _Miss:
    """Sentinel type for cache misses (a cached value may itself be falsy)."""

    _instance: _Miss | None = None

    def __new__(cls) -> _Miss:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"


MISS: Final = _Miss()


@dataclass(frozen=True)
class _Entry:
    value: Any
    expires_at: datetime


class PermissionCache:
    """Key -> value store with per-entry TTL."""

    def __init__(
        self,
        clock: Clock | None = None,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        self._clock = clock or SystemClock()
        self._default_ttl = default_ttl_seconds
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str) -> Any:
        """The cached value, or MISS if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return MISS
        if self._clock.now() >= entry.expires_at:
            del self._entries[key]
            logger.debug("permission_cache_expired", extra={"cache_key": key})
            return MISS
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        self._entries[key] = _Entry(
            value=value,
            expires_at=self._clock.now() + timedelta(seconds=ttl),
        )

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
