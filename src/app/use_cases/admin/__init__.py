"""Admin use cases for system administration operations."""

from .purge_login_sessions_use_case import (
    PurgeLoginSessionsUseCase,
    PurgeLoginSessionsResponse,
)

__all__ = [
    "PurgeLoginSessionsUseCase",
    "PurgeLoginSessionsResponse",
]
