"""
Role-Based Access Control

Role hierarchy checks and the static permission table. Roles arrive as plain
strings (from JWT claims or the database); anything that is not a known role
has level 0 and fails every check.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Union

from src.domain.entities import UserRole
from src.domain.errors import ErrorCode
from src.libs.result import Error, Result, Return

ROLE_HIERARCHY: Dict[UserRole, int] = {
    UserRole.USER: 1,
    UserRole.ADMIN: 2,
}


class Permission(str, Enum):
    # User management
    USER_CREATE = "USER_CREATE"
    USER_READ = "USER_READ"
    USER_UPDATE_OWN = "USER_UPDATE_OWN"
    USER_UPDATE_ANY = "USER_UPDATE_ANY"
    USER_DELETE = "USER_DELETE"

    # Content management
    CONTENT_CREATE = "CONTENT_CREATE"
    CONTENT_READ = "CONTENT_READ"
    CONTENT_UPDATE_OWN = "CONTENT_UPDATE_OWN"
    CONTENT_UPDATE_ANY = "CONTENT_UPDATE_ANY"
    CONTENT_DELETE_OWN = "CONTENT_DELETE_OWN"
    CONTENT_DELETE_ANY = "CONTENT_DELETE_ANY"

    # Admin panel
    ADMIN_PANEL_ACCESS = "ADMIN_PANEL_ACCESS"
    ANALYTICS_VIEW = "ANALYTICS_VIEW"
    SETTINGS_MANAGE = "SETTINGS_MANAGE"


_EVERYONE = frozenset({UserRole.USER, UserRole.ADMIN})
_ADMINS = frozenset({UserRole.ADMIN})

PERMISSIONS: Dict[Permission, FrozenSet[UserRole]] = {
    Permission.USER_CREATE: _ADMINS,
    Permission.USER_READ: _EVERYONE,
    Permission.USER_UPDATE_OWN: _EVERYONE,
    Permission.USER_UPDATE_ANY: _ADMINS,
    Permission.USER_DELETE: _ADMINS,
    Permission.CONTENT_CREATE: _EVERYONE,
    Permission.CONTENT_READ: _EVERYONE,
    Permission.CONTENT_UPDATE_OWN: _EVERYONE,
    Permission.CONTENT_UPDATE_ANY: _ADMINS,
    Permission.CONTENT_DELETE_OWN: _EVERYONE,
    Permission.CONTENT_DELETE_ANY: _ADMINS,
    Permission.ADMIN_PANEL_ACCESS: _ADMINS,
    Permission.ANALYTICS_VIEW: _ADMINS,
    Permission.SETTINGS_MANAGE: _ADMINS,
}


def _as_role(role: Union[str, UserRole, None]) -> Optional[UserRole]:
    try:
        return UserRole(role)
    except ValueError:
        return None


def role_level(role: Union[str, UserRole, None]) -> int:
    known = _as_role(role)
    return ROLE_HIERARCHY[known] if known is not None else 0


def has_role(actual_role: Union[str, UserRole, None], required_role: UserRole) -> bool:
    return role_level(actual_role) >= role_level(required_role)


def has_permission(role: Union[str, UserRole, None], permission: Union[str, Permission]) -> bool:
    known = _as_role(role)
    return known is not None and known in PERMISSIONS.get(permission, frozenset())


def require_auth(identity) -> Result:
    """Succeed with the identity, or UNAUTHORIZED when there is none"""
    if identity is None:
        return Return.err(Error(ErrorCode.UNAUTHORIZED, "Authentication required"))
    return Return.ok(identity)


def require_role(identity, required_role: UserRole) -> Result:
    authenticated = require_auth(identity)
    if authenticated.is_err():
        return authenticated

    if not has_role(identity.role, required_role):
        return Return.err(
            Error(ErrorCode.FORBIDDEN, "Forbidden: Insufficient permissions")
        )
    return authenticated
