"""
Login Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ACTIVE_LOGIN_STATUSES,
    LoginSessionStatus,
    UserRole,
)

# Export all entities
from .user import User
from .login_session import LoginSession

__all__ = [
    # Enums
    "ACTIVE_LOGIN_STATUSES",
    "LoginSessionStatus",
    "UserRole",
    # Entities
    "User",
    "LoginSession",
]
