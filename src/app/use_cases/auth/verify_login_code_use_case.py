"""
Verify Login Code Use Case

Second phase of the email-OTP login: checks the submitted code and, on
success, mints the session credential.
"""

import hmac
import logging
from datetime import datetime
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.api.utils.jwt import sign_session
from src.app.services.role_router import route_for_role
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ACTIVE_LOGIN_STATUSES, LoginSessionStatus
from .dtos import VerifyLoginResponse

logger = logging.getLogger(__name__)


class VerifyLoginCodeUseCase:
    """
    Use case for verifying a login code.

    Business Rules:
    - Fails if now > expires_at or now > code_expires
    - Constant-time code comparison to prevent timing attacks
    - VERIFY_MAX_ATTEMPTS wrong codes lock the session (exhausted)
    - Single-use: exactly one request can move the session to verified
    - Credential carries user id and role, signed with the process secret
    """

    def __init__(self, uow: UnitOfWork, max_attempts: int = ApplicationConfig.VERIFY_MAX_ATTEMPTS):
        self.uow = uow
        self.max_attempts = max_attempts

    async def execute(self, session_id: UUID, code: str) -> Result[VerifyLoginResponse]:
        """
        Execute verify login code use case.

        Args:
            session_id: Login session returned by initiate
            code: Code the user received by email

        Returns:
            Result with user id, role, destination and signed credential, or Error

        Errors:
            - LOGIN_SESSION_NOT_FOUND: Unknown, already consumed, or no user behind it
            - SESSION_EXPIRED: Login window is over
            - CODE_EXPIRED: Current code is over (resend allowed)
            - INVALID_CODE: Code does not match
            - TOO_MANY_ATTEMPTS: Session locked after repeated wrong codes
        """
        async with self.uow:
            login_session = await self.uow.login_sessions.get_by_id(session_id)

            if login_session is None or login_session.status == LoginSessionStatus.verified:
                return Return.err(Error("LOGIN_SESSION_NOT_FOUND", "invalid session"))

            if login_session.status == LoginSessionStatus.exhausted:
                return Return.err(Error("TOO_MANY_ATTEMPTS", "too many attempts"))

            now = datetime.utcnow()
            if login_session.status == LoginSessionStatus.expired or now > login_session.expires_at:
                await self.uow.login_sessions.mark_expired(session_id)
                await self.uow.commit()
                return Return.err(Error("SESSION_EXPIRED", "session expired"))

            if login_session.status not in ACTIVE_LOGIN_STATUSES:
                return Return.err(Error("LOGIN_SESSION_NOT_FOUND", "invalid session"))

            if now > login_session.code_expires:
                return Return.err(Error("CODE_EXPIRED", "code expired"))

            if not hmac.compare_digest(
                login_session.verification_code.encode(), code.encode()
            ):
                exhausted = await self.uow.login_sessions.record_failed_attempt(
                    session_id, self.max_attempts
                )
                await self.uow.commit()
                if exhausted:
                    logger.warning(f"Login session {session_id} locked after {self.max_attempts} wrong codes")
                    return Return.err(Error("TOO_MANY_ATTEMPTS", "too many attempts"))
                return Return.err(Error("INVALID_CODE", "invalid code"))

            if login_session.user_id is None:
                return Return.err(Error("LOGIN_SESSION_NOT_FOUND", "invalid session"))

            user = await self.uow.users.get_by_id(login_session.user_id)
            if user is None:
                return Return.err(Error("LOGIN_SESSION_NOT_FOUND", "invalid session"))

            # Conditional transition; a concurrent duplicate or resend makes this fail
            consumed = await self.uow.login_sessions.consume(session_id, code, now)
            if not consumed:
                current = await self.uow.login_sessions.get_by_id(session_id)
                if (
                    current is not None
                    and current.status in ACTIVE_LOGIN_STATUSES
                    and now <= current.expires_at
                ):
                    # Code was replaced by a resend in the meantime
                    return Return.err(Error("INVALID_CODE", "invalid code"))
                return Return.err(Error("LOGIN_SESSION_NOT_FOUND", "invalid session"))

            await self.uow.commit()

            role = user.role.value if hasattr(user.role, "value") else str(user.role)
            session_token = sign_session(str(user.id), role)

            logger.info(f"Login session {session_id} verified for user {user.id}")
            return Return.ok(
                VerifyLoginResponse(
                    user_id=str(user.id),
                    role=role,
                    redirect_to=route_for_role(role),
                    session_token=session_token,
                )
            )
