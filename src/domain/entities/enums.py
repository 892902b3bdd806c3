"""
Login Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried by a user and by their session credential"""

    admin = "admin"
    client = "client"
    auditor = "auditor"
    collaborator = "collaborator"


class LoginSessionStatus(str, Enum):
    """Phase of a pending login attempt"""

    created = "created"
    code_sent = "code_sent"
    verified = "verified"
    expired = "expired"
    exhausted = "exhausted"


# Phases in which a code may still be resent or verified
ACTIVE_LOGIN_STATUSES = (LoginSessionStatus.created, LoginSessionStatus.code_sent)
