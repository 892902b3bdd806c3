"""
Post-login destination by role.

Navigation convenience only; access control happens at each protected
resource.
"""

from typing import Optional

from src.domain.entities import UserRole

DASHBOARD_ROUTES = {
    UserRole.admin.value: "/admin",
    UserRole.client.value: "/dashboard",
    UserRole.auditor.value: "/auditor",
    UserRole.collaborator.value: "/collaborator",
}

# Unknown roles land on the public home page
DEFAULT_ROUTE = "/"


def route_for_role(role: Optional[str]) -> str:
    """Return the dashboard path for ``role``, or DEFAULT_ROUTE if unknown"""
    if isinstance(role, UserRole):
        role = role.value
    return DASHBOARD_ROUTES.get(role, DEFAULT_ROUTE)
