from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_sender import LoggingEmailSender, SmtpEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.cookies import SessionCookieManager, get_cookie_manager
from src.api.utils.jwt import CredentialPayload, verify_session
from src.app.services.email_sender import IEmailSender


def _engine_options(db_uri: str) -> dict:
    """Bounded timeouts so no store access blocks indefinitely"""
    timeout = ApplicationConfig.STORE_TIMEOUT_SECONDS
    if db_uri.startswith("sqlite"):
        return {"connect_args": {"timeout": timeout}}
    options = {"pool_timeout": timeout}
    if "+asyncpg" in db_uri:
        options["connect_args"] = {"command_timeout": timeout}
    return options


engine = create_async_engine(
    ApplicationConfig.DB_URI,
    echo=False,
    future=True,
    **_engine_options(ApplicationConfig.DB_URI),
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_sender() -> IEmailSender:
    if ApplicationConfig.MAIL_BACKEND == "smtp":
        return SmtpEmailSender(
            hostname=ApplicationConfig.MAIL_SERVER,
            port=ApplicationConfig.MAIL_PORT,
            from_address=ApplicationConfig.MAIL_FROM,
            from_name=ApplicationConfig.MAIL_FROM_NAME,
            username=ApplicationConfig.MAIL_USERNAME,
            password=ApplicationConfig.MAIL_PASSWORD,
            timeout=ApplicationConfig.MAIL_TIMEOUT_SECONDS,
        )
    return LoggingEmailSender()


async def get_optional_credential(
    request: Request,
    cookies: SessionCookieManager = Depends(get_cookie_manager),
) -> Optional[CredentialPayload]:
    """
    Dependency to read and verify the session cookie.

    Returns:
        Decoded credential payload, or None if the cookie is absent,
        tampered with, signed with another secret, or expired
    """
    token = cookies.read(request)
    if token is None:
        return None

    result = verify_session(token)
    if result.is_err():
        return None

    return result.value
