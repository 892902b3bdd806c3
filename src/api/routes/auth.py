from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.api.utils.cookies import SessionCookieManager, get_cookie_manager
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    InitiateLoginUseCase,
    ResendLoginCodeUseCase,
    RetryLaterError,
    VerifyLoginCodeUseCase,
)
from src.depends import get_email_sender, get_unit_of_work

router = APIRouter(tags=["Authentication"])


def _retry_after_headers(error) -> dict:
    if isinstance(error, RetryLaterError):
        return {"Retry-After": str(error.retry_after)}
    return {}


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InitiateLoginRequest(CamelModel):
    """
    Initiate login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="Email address to send the code to")


class WarningBody(CamelModel):
    code: str
    message: str


class InitiateLoginBody(CamelModel):
    session_id: str = Field(..., alias="sessionId")
    warning: Optional[WarningBody] = None


@router.post(
    "/login/initiate",
    status_code=status.HTTP_200_OK,
    response_model=InitiateLoginBody,
    response_model_exclude_none=True,
)
async def initiate_login(
    request: InitiateLoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Initiate Login

    Creates a login session and emails a one-time code.
    A dispatch failure still returns the session id, with a warning;
    the client can retry through /login/resend.

    Raises:
        - 400 Bad Request: Missing or malformed email
        - 429 Too Many Requests: Too many login attempts for this email
        - 500 Internal Server Error: Server error
    """
    use_case = InitiateLoginUseCase(uow, email_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "LOGIN_RATE_LIMITED":
            raise ClientError(
                error,
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers=_retry_after_headers(error),
            )
        raise ServerError(error)

    data = result.value
    warning = None
    if data.warning is not None:
        warning = WarningBody(code=data.warning.code, message=data.warning.message)
    return InitiateLoginBody(session_id=data.session_id, warning=warning)


class ResendLoginCodeRequest(CamelModel):
    """
    Resend login code HTTP request payload
    """

    session_id: UUID = Field(..., alias="sessionId", description="Login session id")


class OkBody(CamelModel):
    ok: bool = True


@router.post("/login/resend", status_code=status.HTTP_200_OK, response_model=OkBody)
async def resend_login_code(
    request: ResendLoginCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Resend Login Code

    Issues a new code for the same session with a fresh code expiry.
    The overall login window is not extended.

    Raises:
        - 401 Unauthorized: Unknown or expired session
        - 429 Too Many Requests: Session locked, or cooldown not elapsed
        - 502 Bad Gateway: Email could not be sent
        - 500 Internal Server Error: Server error
    """
    use_case = ResendLoginCodeUseCase(uow, email_sender)
    result = await use_case.execute(request.session_id)

    if result.is_err():
        error = result.error
        if error.code in ("LOGIN_SESSION_NOT_FOUND", "SESSION_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "TOO_MANY_ATTEMPTS":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        elif error.code == "RESEND_TOO_SOON":
            raise ClientError(
                error,
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers=_retry_after_headers(error),
            )
        elif error.code == "DISPATCH_FAILED":
            raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ServerError(error)

    return OkBody(ok=True)


class VerifyLoginCodeRequest(CamelModel):
    """
    Verify login code HTTP request payload
    """

    session_id: UUID = Field(..., alias="sessionId", description="Login session id")
    code: str = Field(..., min_length=1, max_length=16, description="Code from the email")


class VerifyLoginBody(CamelModel):
    ok: bool = True
    role: str
    redirect_to: str = Field(..., alias="redirectTo")


@router.post("/login/verify", status_code=status.HTTP_200_OK, response_model=VerifyLoginBody)
async def verify_login_code(
    request: VerifyLoginCodeRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cookies: SessionCookieManager = Depends(get_cookie_manager),
):
    """
    Verify Login Code

    Checks the code and, on success, sets the session cookie.

    Raises:
        - 404 Not Found: Unknown or already used session
        - 401 Unauthorized: Session or code expired, or wrong code
        - 429 Too Many Requests: Session locked after repeated wrong codes
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyLoginCodeUseCase(uow)
    result = await use_case.execute(request.session_id, request.code)

    if result.is_err():
        error = result.error
        if error.code == "LOGIN_SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("SESSION_EXPIRED", "CODE_EXPIRED", "INVALID_CODE"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "TOO_MANY_ATTEMPTS":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        raise ServerError(error)

    data = result.value
    cookies.issue(response, data.session_token)
    return VerifyLoginBody(ok=True, role=data.role, redirect_to=data.redirect_to)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=OkBody)
async def logout(
    response: Response,
    cookies: SessionCookieManager = Depends(get_cookie_manager),
):
    """
    Logout

    Tells the browser to drop the session cookie. The credential itself
    stays valid until it expires.
    """
    cookies.clear(response)
    return OkBody(ok=True)
