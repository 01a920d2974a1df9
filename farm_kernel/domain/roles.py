"""
Role identity for access control.

A role is either one of the six built-in staff roles compiled into the
application, or a custom role created at runtime by an administrator and
stored in ``custom_roles``.  Both are carried as typed values; the stored
string form is only produced at the persistence and policy-lookup seams.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union
from uuid import UUID

SUPER_ADMIN_ROLE_NAME = "Super Admin"


class BuiltinRole(str, Enum):
    """Staff roles with static permission rules."""

    SUPER_ADMIN = SUPER_ADMIN_ROLE_NAME
    BRANCH_MANAGER = "Branch Manager"
    VET = "Vet"
    STOREKEEPER = "Storekeeper"
    ACCOUNTANT = "Accountant"
    FIELD_STAFF = "Field Staff"


@dataclass(frozen=True)
class CustomRole:
    """A runtime-defined role; role_id references custom_roles.id when known."""

    name: str
    role_id: UUID | None = None

    def __str__(self) -> str:
        return self.name


Role = Union[BuiltinRole, CustomRole]
RoleLike = Union[BuiltinRole, CustomRole, str]


def parse_role(name: str, role_id: UUID | None = None) -> Role:
    """Map a stored role string to a BuiltinRole, or a CustomRole otherwise."""
    try:
        return BuiltinRole(name)
    except ValueError:
        return CustomRole(name=name, role_id=role_id)


def role_name(role: RoleLike | None) -> str | None:
    """The string key under which a role's rules and overrides are stored."""
    if role is None:
        return None
    if isinstance(role, BuiltinRole):
        return role.value
    if isinstance(role, CustomRole):
        return role.name
    return role
