"""
LoginSession Entity

Server-side record of one in-progress email-OTP login attempt.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import LoginSessionStatus


class LoginSession(SQLModel, table=True):
    """
    LoginSession entity - a pending login keyed by its session id.

    Business Rules:
    - id is the client-visible correlator, never the credential
    - verification_code is overwritten on resend
    - code_expires bounds one code, expires_at bounds the whole attempt
    - expires_at is set once at creation and never extended
    - Single-use: a verified session cannot be verified again
    """

    __tablename__ = "login_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255, index=True)
    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    verification_code: str = Field(max_length=16)
    status: LoginSessionStatus = Field(default=LoginSessionStatus.created)
    failed_attempts: int = Field(default=0)

    # Timestamps (naive UTC)
    code_expires: datetime = Field(sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_sent_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_login_session_expires_at", "expires_at"),
        Index("idx_login_session_status", "status"),
    )
