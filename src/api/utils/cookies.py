"""
Session Cookie Manager

Puts the session credential into, and removes it from, the browser.
"""

from typing import Optional

from fastapi import Request, Response

from config import ApplicationConfig

SAMESITE = "strict"
COOKIE_PATH = "/"


class SessionCookieManager:
    """
    Issues and clears the HttpOnly session cookie.

    Attributes are identical on issue and clear so the browser matches
    and drops the same cookie.
    """

    def __init__(self, name: str, secure: bool, max_age: Optional[int] = None):
        self.name = name
        self.secure = secure
        self.max_age = max_age

    def issue(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.name,
            value=token,
            max_age=self.max_age,
            path=COOKIE_PATH,
            secure=self.secure,
            httponly=True,
            samesite=SAMESITE,
        )

    def clear(self, response: Response) -> None:
        # Max-Age=0 and Expires=now
        response.delete_cookie(
            key=self.name,
            path=COOKIE_PATH,
            secure=self.secure,
            httponly=True,
            samesite=SAMESITE,
        )

    def read(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.name) or None


def get_cookie_manager() -> SessionCookieManager:
    max_age = (
        ApplicationConfig.SESSION_MAX_AGE_SECONDS
        if ApplicationConfig.SESSION_COOKIE_PERSISTENT
        else None
    )
    return SessionCookieManager(
        name=ApplicationConfig.SESSION_COOKIE_NAME,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        max_age=max_age,
    )
