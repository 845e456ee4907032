"""
core/permissions.py
-------------------
Static route-group → allowed-roles table.

Admins and Managers run stock entry and distribution; everyone signed in
can read the catalog, reports and analytics; only Admins manage users.
"""

from inventory_app.models.user import UserRole

ALL_ROLES = frozenset(UserRole)

ROUTE_PERMISSIONS: dict[str, frozenset[UserRole]] = {
    "company": ALL_ROLES,
    "catalog": ALL_ROLES,
    "stock": frozenset({UserRole.admin, UserRole.manager}),
    "workers": frozenset({UserRole.admin, UserRole.manager}),
    "distribution": frozenset({UserRole.admin, UserRole.manager}),
    "reports": ALL_ROLES,
    "analytics": ALL_ROLES,
    "users": frozenset({UserRole.admin}),
}


def is_allowed(role: str, group: str) -> bool:
    try:
        return UserRole(role) in ROUTE_PERMISSIONS[group]
    except ValueError:
        return False
