"""
Resend Login Code Use Case

Replaces the code of a pending login session and emails it again.
"""

import logging
import math
from datetime import datetime, timedelta
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender, otp_email_template
from src.app.services.otp import generate_otp
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import LoginSessionStatus
from .dtos import ResendLoginCodeResponse, RetryLaterError

logger = logging.getLogger(__name__)


class ResendLoginCodeUseCase:
    """
    Use case for resending a login code.

    Business Rules:
    - Allowed after the current code expired, as long as the session has not
    - New code always differs from the previous one
    - code_expires is reset, expires_at is never extended
    - At most one resend per RESEND_COOLDOWN_SECONDS per session
    - Verified sessions are treated as unknown
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        otp_length: int = ApplicationConfig.OTP_LENGTH,
        code_ttl: timedelta = timedelta(minutes=ApplicationConfig.OTP_CODE_TTL_MINUTES),
        cooldown: timedelta = timedelta(seconds=ApplicationConfig.RESEND_COOLDOWN_SECONDS),
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.otp_length = otp_length
        self.code_ttl = code_ttl
        self.cooldown = cooldown

    async def execute(self, session_id: UUID) -> Result[ResendLoginCodeResponse]:
        """
        Execute resend login code use case.

        Args:
            session_id: Login session returned by initiate

        Returns:
            Result with ok=True, or Error

        Errors:
            - LOGIN_SESSION_NOT_FOUND: Unknown or already verified session
            - SESSION_EXPIRED: Login window is over
            - TOO_MANY_ATTEMPTS: Session locked after repeated wrong codes
            - RESEND_TOO_SOON: Cooldown has not elapsed
            - DISPATCH_FAILED: Code replaced but the email could not be sent
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

            retry_at = login_session.last_sent_at + self.cooldown
            if now < retry_at:
                retry_after = max(1, math.ceil((retry_at - now).total_seconds()))
                return Return.err(
                    RetryLaterError(
                        "RESEND_TOO_SOON", f"resend too soon, retry in {retry_after}s", retry_after
                    )
                )

            previous_code = login_session.verification_code
            code = generate_otp(self.otp_length)
            while code == previous_code:
                code = generate_otp(self.otp_length)

            replaced = await self.uow.login_sessions.replace_code(
                session_id, code, now + self.code_ttl, now
            )
            if not replaced:
                # Lost a race with verify or expiry
                return Return.err(Error("LOGIN_SESSION_NOT_FOUND", "invalid session"))

            await self.uow.commit()

            if login_session.user_id is None:
                logger.info(f"Resend for unknown email, session {session_id} not dispatched")
                return Return.ok(ResendLoginCodeResponse())

            tpl = otp_email_template(code, ttl_minutes=int(self.code_ttl.total_seconds() // 60))
            sent = await self.email_sender.send(login_session.email, tpl.subject, tpl.text, tpl.html)
            if not sent:
                logger.warning(f"Verification code re-dispatch failed for login session {session_id}")
                return Return.err(
                    Error("DISPATCH_FAILED", "Failed to send verification email. Please try again.")
                )

            await self.uow.login_sessions.mark_code_sent(session_id)
            await self.uow.commit()

            logger.info(f"Verification code resent for login session {session_id}")
            return Return.ok(ResendLoginCodeResponse())
