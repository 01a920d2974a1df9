"""
Module: farm_kernel.models.role_permission
Responsibility: ORM persistence for administrator-defined roles and their
    per-module permission overrides.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - One role_permissions row per (role_name, module_path)
      (uq_role_permissions_role_module).
    - custom_roles.name is unique.  System roles (the six built-in roles)
      may also have rows here; role_permissions.role_id is nullable for
      overrides keyed only by name.

Rows are written by the Roles & Permissions admin screen; the kernel only
reads them (PermissionSelector).
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from farm_kernel.db.base import TrackedBase, UUIDString


class CustomRoleRecord(TrackedBase):
    """A role created at runtime by an administrator."""

    __tablename__ = "custom_roles"

    __table_args__ = (
        UniqueConstraint("name", name="uq_custom_roles_name"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    is_system_role: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    permissions: Mapped[list["RolePermission"]] = relationship(
        back_populates="role",
    )

    def __repr__(self) -> str:
        return f"<CustomRoleRecord {self.name}>"


class RolePermission(TrackedBase):
    """Dynamic permission override for one (role, module) pair."""

    __tablename__ = "role_permissions"

    __table_args__ = (
        UniqueConstraint("role_name", "module_path", name="uq_role_permissions_role_module"),
        Index("idx_role_permissions_role", "role_name"),
    )

    role_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("custom_roles.id"),
        nullable=True,
    )

    role_name: Mapped[str] = mapped_column(String(100), nullable=False)

    module_path: Mapped[str] = mapped_column(String(255), nullable=False)

    can_view: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    can_create: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    can_update: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    can_delete: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    role: Mapped["CustomRoleRecord | None"] = relationship(back_populates="permissions")

    def __repr__(self) -> str:
        return f"<RolePermission {self.role_name} {self.module_path} view={self.can_view}>"
