"""
Initiate Login Use Case

First phase of the email-OTP login: creates a login session and emails
its one-time code.
"""

import logging
import math
from datetime import datetime, timedelta

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender, otp_email_template
from src.app.services.otp import generate_otp
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import LoginSession, LoginSessionStatus
from .dtos import InitiateLoginResponse, RetryLaterError

logger = logging.getLogger(__name__)


class InitiateLoginUseCase:
    """
    Use case for starting an email-OTP login.

    Business Rules:
    - A fresh login session is created for every call
    - Code is valid for OTP_CODE_TTL_MINUTES (10 min)
    - Session is valid for LOGIN_SESSION_TTL_MINUTES (15 min), resends included
    - Session is committed before dispatch; a dispatch failure does not undo it
    - Unknown emails get a session id too (no account enumeration), but no email
    - At most LOGIN_MAX_ATTEMPTS initiations per email per LOGIN_RATE_WINDOW_MINUTES
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        otp_length: int = ApplicationConfig.OTP_LENGTH,
        code_ttl: timedelta = timedelta(minutes=ApplicationConfig.OTP_CODE_TTL_MINUTES),
        session_ttl: timedelta = timedelta(minutes=ApplicationConfig.LOGIN_SESSION_TTL_MINUTES),
        max_attempts: int = ApplicationConfig.LOGIN_MAX_ATTEMPTS,
        rate_window: timedelta = timedelta(minutes=ApplicationConfig.LOGIN_RATE_WINDOW_MINUTES),
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.otp_length = otp_length
        self.code_ttl = code_ttl
        self.session_ttl = session_ttl
        self.max_attempts = max_attempts
        self.rate_window = rate_window

    async def execute(self, email: str) -> Result[InitiateLoginResponse]:
        """
        Execute initiate login use case.

        Args:
            email: Address of the identity being authenticated

        Returns:
            Result with the new session id. ``warning`` carries
            DISPATCH_FAILED when the email could not be sent.

        Errors:
            - LOGIN_RATE_LIMITED: Too many initiations for this email
        """
        email = email.strip().lower()

        async with self.uow:
            now = datetime.utcnow()
            count, oldest = await self.uow.login_sessions.recent_initiations(
                email, now - self.rate_window
            )
            if count >= self.max_attempts:
                retry_after = max(1, math.ceil((oldest + self.rate_window - now).total_seconds()))
                logger.warning(f"Login initiation rate limit hit, retry in {retry_after}s")
                return Return.err(
                    RetryLaterError("LOGIN_RATE_LIMITED", "too many attempts", retry_after)
                )

            user = await self.uow.users.get_by_email(email)
            code = generate_otp(self.otp_length)
            login_session = LoginSession(
                # Address as stored on the user record
                email=user.email if user else email,
                user_id=user.id if user else None,
                verification_code=code,
                status=LoginSessionStatus.created,
                code_expires=now + self.code_ttl,
                expires_at=now + self.session_ttl,
                last_sent_at=now,
                created_at=now,
            )
            login_session = await self.uow.login_sessions.create(login_session)
            session_id = login_session.id

            # Commit first so the session survives a dispatch failure
            await self.uow.commit()

            if user is None:
                logger.info(f"Login initiated for unknown email, session {session_id} not dispatched")
                return Return.ok(InitiateLoginResponse(session_id=str(session_id)))

            tpl = otp_email_template(code, ttl_minutes=int(self.code_ttl.total_seconds() // 60))
            sent = await self.email_sender.send(login_session.email, tpl.subject, tpl.text, tpl.html)

            if not sent:
                logger.warning(f"Verification code dispatch failed for login session {session_id}")
                return Return.ok(
                    InitiateLoginResponse(
                        session_id=str(session_id),
                        warning=Error(
                            "DISPATCH_FAILED",
                            "Failed to send verification email. Please request a new code.",
                        ),
                    )
                )

            await self.uow.login_sessions.mark_code_sent(session_id)
            await self.uow.commit()

            logger.info(f"Verification code sent for login session {session_id}")
            return Return.ok(InitiateLoginResponse(session_id=str(session_id)))
