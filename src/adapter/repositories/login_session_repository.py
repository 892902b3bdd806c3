from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.login_session_repository import ILoginSessionRepository
from src.domain.entities import ACTIVE_LOGIN_STATUSES, LoginSession, LoginSessionStatus


class LoginSessionRepository(ILoginSessionRepository):
    """LoginSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, login_session: LoginSession) -> LoginSession:
        """Create a new login session"""
        self.session.add(login_session)
        await self.session.flush()
        await self.session.refresh(login_session)
        return login_session

    async def get_by_id(self, session_id: UUID) -> Optional[LoginSession]:
        """Get login session by ID"""
        stmt = (
            select(LoginSession)
            .where(LoginSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def recent_initiations(
        self, email: str, since: datetime
    ) -> Tuple[int, Optional[datetime]]:
        stmt = select(func.count(LoginSession.id), func.min(LoginSession.created_at)).where(
            func.lower(LoginSession.email) == email.lower(),
            LoginSession.created_at > since,
        )
        result = await self.session.exec(stmt)
        count, oldest = result.one()
        return count, oldest

    async def mark_code_sent(self, session_id: UUID) -> bool:
        stmt = (
            update(LoginSession)
            .where(
                LoginSession.id == session_id,
                LoginSession.status == LoginSessionStatus.created,
            )
            .values(status=LoginSessionStatus.code_sent)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def replace_code(
        self,
        session_id: UUID,
        code: str,
        code_expires: datetime,
        now: datetime,
    ) -> bool:
        # expires_at is deliberately absent from .values()
        stmt = (
            update(LoginSession)
            .where(
                LoginSession.id == session_id,
                LoginSession.status.in_(ACTIVE_LOGIN_STATUSES),
                LoginSession.expires_at >= now,
            )
            .values(
                verification_code=code,
                code_expires=code_expires,
                last_sent_at=now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def consume(self, session_id: UUID, code: str, now: datetime) -> bool:
        stmt = (
            update(LoginSession)
            .where(
                LoginSession.id == session_id,
                LoginSession.status.in_(ACTIVE_LOGIN_STATUSES),
                LoginSession.verification_code == code,
                LoginSession.code_expires >= now,
                LoginSession.expires_at >= now,
            )
            .values(status=LoginSessionStatus.verified, verified_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def record_failed_attempt(self, session_id: UUID, max_attempts: int) -> bool:
        active = (
            LoginSession.id == session_id,
            LoginSession.status.in_(ACTIVE_LOGIN_STATUSES),
        )
        await self.session.execute(
            update(LoginSession)
            .where(*active)
            .values(failed_attempts=LoginSession.failed_attempts + 1)
        )
        result = await self.session.execute(
            update(LoginSession)
            .where(*active, LoginSession.failed_attempts >= max_attempts)
            .values(status=LoginSessionStatus.exhausted)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def mark_expired(self, session_id: UUID) -> bool:
        stmt = (
            update(LoginSession)
            .where(
                LoginSession.id == session_id,
                LoginSession.status.in_(ACTIVE_LOGIN_STATUSES),
            )
            .values(status=LoginSessionStatus.expired)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_stale(self, before: datetime) -> int:
        stmt = delete(LoginSession).where(LoginSession.expires_at < before)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
