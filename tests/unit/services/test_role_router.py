"""
Unit tests for post-login role routing
"""
import pytest

from src.app.services.role_router import DASHBOARD_ROUTES, DEFAULT_ROUTE, route_for_role
from src.domain.entities import UserRole


@pytest.mark.parametrize(
    "role, expected",
    [
        ("admin", "/admin"),
        ("client", "/dashboard"),
        ("auditor", "/auditor"),
        ("collaborator", "/collaborator"),
    ],
)
def test_known_roles(role, expected):
    assert route_for_role(role) == expected


def test_accepts_enum_members():
    assert route_for_role(UserRole.admin) == "/admin"


@pytest.mark.parametrize("role", ["superuser", "", "ADMIN", None])
def test_unknown_roles_fall_back_to_default(role):
    assert route_for_role(role) == DEFAULT_ROUTE


def test_every_role_has_a_route():
    assert set(DASHBOARD_ROUTES) == {role.value for role in UserRole}
