"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the login flow.
Provides type safety and clear contracts between layers.
"""

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel

from libs.result import Error


@dataclass(frozen=True)
class RetryLaterError(Error):
    """Error for a rate-limited request; retry_after is in whole seconds"""

    retry_after: int = 1


# ============================================================================
# Response DTOs
# ============================================================================


class InitiateLoginResponse(BaseModel):
    """Response for initiate login use case"""

    session_id: str
    # Set when the code could not be dispatched; the session is still usable via resend
    warning: Optional[Error] = None


class ResendLoginCodeResponse(BaseModel):
    """Response for resend login code use case"""

    ok: bool = True


class VerifyLoginResponse(BaseModel):
    """Response for verify login code use case"""

    user_id: str
    role: str
    redirect_to: str
    session_token: str
