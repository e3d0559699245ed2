"""Roles and role resolution."""

from .base import (
    MISSING,
    Attribute,
    Parameter,
    ParameterizedRole,
    Role,
    RoleMeta,
    is_parameterized_role,
    is_role,
)
from .resolver import RoleResolver

__all__ = [
    "MISSING",
    "Attribute",
    "Parameter",
    "ParameterizedRole",
    "Role",
    "RoleMeta",
    "RoleResolver",
    "is_parameterized_role",
    "is_role",
]
