"""Static role -> resource -> action permission table.

Loaded once at import; lookups are plain dictionary reads.
"""

from typing import Dict, Union

from shared.utils.enums import UserRole

RoleLike = Union[UserRole, str]

ROLE_PERMISSIONS: Dict[UserRole, Dict[str, Dict[str, bool]]] = {
    UserRole.ADMIN: {
        "users": {"create": True, "read": True, "update": True, "delete": True, "manage_roles": True},
        "assets": {"create": True, "read": True, "update": True, "delete": True, "assign": True, "view_all": True},
        "categories": {"create": True, "read": True, "update": True, "delete": True},
        "movements": {"create": True, "read": True},
        "maintenance": {"create": True, "read": True, "update": True},
        "incidents": {"create": True, "read": True, "update": True},
        "reports": {"generate": True, "view_all": True},
    },
    UserRole.INVENTORY_MANAGER: {
        "users": {"create": False, "read": True, "update": False, "delete": False, "manage_roles": False},
        "assets": {"create": True, "read": True, "update": True, "delete": True, "assign": True, "view_all": True},
        "categories": {"create": True, "read": True, "update": True, "delete": False},
        "movements": {"create": True, "read": True},
        "maintenance": {"create": True, "read": True, "update": True},
        "incidents": {"create": True, "read": True, "update": True},
        "reports": {"generate": True, "view_all": True},
    },
    UserRole.ASSET_RESPONSIBLE: {
        "users": {"create": False, "read": False, "update": False, "delete": False, "manage_roles": False},
        "assets": {"create": False, "read": True, "update": False, "delete": False, "assign": False, "view_all": False},
        "categories": {"create": False, "read": True, "update": False, "delete": False},
        "movements": {"create": False, "read": True},
        # may request maintenance and report incidents, not drive them
        "maintenance": {"create": True, "read": True, "update": False},
        "incidents": {"create": True, "read": True, "update": False},
        "reports": {"generate": False, "view_all": False},
    },
}


def _as_role(role: RoleLike):
    try:
        return UserRole(role)
    except ValueError:
        return None


def has_permission(role: RoleLike, resource: str, action: str) -> bool:
    permissions = ROLE_PERMISSIONS.get(_as_role(role))
    if not permissions:
        return False
    return permissions.get(resource, {}).get(action, False)


def get_role_permissions(role: RoleLike) -> Dict[str, Dict[str, bool]]:
    return ROLE_PERMISSIONS.get(_as_role(role), {})


def can_manage_assets(role: RoleLike) -> bool:
    return _as_role(role) in (UserRole.ADMIN, UserRole.INVENTORY_MANAGER)


def can_manage_users(role: RoleLike) -> bool:
    return _as_role(role) == UserRole.ADMIN


def can_view_all_assets(role: RoleLike) -> bool:
    return has_permission(role, "assets", "view_all")
