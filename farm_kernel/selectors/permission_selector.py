"""
Module: farm_kernel.selectors.permission_selector
Responsibility: Read-only queries over ``role_permissions`` -- the dynamic
    per-role module overrides maintained by administrators.
Architecture position: Kernel > Selectors.  Consumed by PermissionResolver
    through the DynamicPermissionStore protocol.

Failure modes:
    - Any database error (connection loss, missing table, bad row) is
      re-raised as PermissionStoreError carrying the role and module.  The
      resolver treats that as "use the static fallback".
"""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from farm_kernel.exceptions import PermissionStoreError
from farm_kernel.logging_config import get_logger
from farm_kernel.models.role_permission import RolePermission
from farm_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.permission")


@dataclass(frozen=True)
class DynamicPermissionRecord:
    """One (role, module) override row."""

    role_name: str
    module_path: str
    can_view: bool
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False
    role_id: UUID | None = None


class DynamicPermissionStore(Protocol):
    """Source of dynamic permission rows.  Implementations raise PermissionStoreError."""

    def module_permission(
        self, role_name: str, module_path: str,
    ) -> DynamicPermissionRecord | None: ...

    def role_permissions(self, role_name: str) -> list[DynamicPermissionRecord]: ...


def _to_record(row: RolePermission) -> DynamicPermissionRecord:
    return DynamicPermissionRecord(
        role_name=row.role_name,
        module_path=row.module_path,
        can_view=bool(row.can_view),
        can_create=bool(row.can_create),
        can_update=bool(row.can_update),
        can_delete=bool(row.can_delete),
        role_id=row.role_id,
    )


class PermissionSelector(BaseSelector):
    """SQL-backed DynamicPermissionStore over the role_permissions table."""

    def module_permission(
        self,
        role_name: str,
        module_path: str,
    ) -> DynamicPermissionRecord | None:
        """
        The override row for exactly (role_name, module_path), if any.

        Raises:
            PermissionStoreError: on any database failure.
        """
        query = select(RolePermission).where(
            RolePermission.role_name == role_name,
            RolePermission.module_path == module_path,
        )
        try:
            row = self.session.execute(query).scalars().one_or_none()
        except SQLAlchemyError as exc:
            raise PermissionStoreError(role_name, module_path, str(exc)) from exc

        return _to_record(row) if row is not None else None

    def role_permissions(self, role_name: str) -> list[DynamicPermissionRecord]:
        """
        Every override row for the role, ordered by module path.

        Raises:
            PermissionStoreError: on any database failure.
        """
        query = (
            select(RolePermission)
            .where(RolePermission.role_name == role_name)
            .order_by(RolePermission.module_path)
        )
        try:
            rows = self.session.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            raise PermissionStoreError(role_name, None, str(exc)) from exc

        logger.debug(
            "role_permissions_loaded",
            extra={"role": role_name, "row_count": len(rows)},
        )
        return [_to_record(row) for row in rows]
