from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from src.domain.entities import LoginSession


class ILoginSessionRepository(ABC):
    """
    LoginSession repository interface - application layer

    Every state change is a conditional update on a single record, so
    concurrent requests for the same session cannot both win.
    """

    @abstractmethod
    async def create(self, login_session: LoginSession) -> LoginSession:
        """Create a new login session"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[LoginSession]:
        """Get login session by ID, bypassing any cached copy"""
        pass

    @abstractmethod
    async def recent_initiations(
        self, email: str, since: datetime
    ) -> Tuple[int, Optional[datetime]]:
        """
        Count sessions created for ``email`` (case-insensitive) after ``since``.

        Returns the count and the created_at of the oldest one counted.
        """
        pass

    @abstractmethod
    async def mark_code_sent(self, session_id: UUID) -> bool:
        """created -> code_sent. Returns True if the session moved."""
        pass

    @abstractmethod
    async def replace_code(
        self,
        session_id: UUID,
        code: str,
        code_expires: datetime,
        now: datetime,
    ) -> bool:
        """
        Store a fresh code for an active, unexpired session.

        Never touches expires_at. Returns True if the session was updated.
        """
        pass

    @abstractmethod
    async def consume(self, session_id: UUID, code: str, now: datetime) -> bool:
        """
        Transition an active session holding ``code`` to verified.

        Returns True for exactly one caller.
        """
        pass

    @abstractmethod
    async def record_failed_attempt(self, session_id: UUID, max_attempts: int) -> bool:
        """Count a mismatching code. Returns True if the session is now exhausted."""
        pass

    @abstractmethod
    async def mark_expired(self, session_id: UUID) -> bool:
        """Move an active session to expired. Returns True if it moved."""
        pass

    @abstractmethod
    async def delete_stale(self, before: datetime) -> int:
        """Delete sessions whose expires_at is before the cutoff. Returns count."""
        pass
