"""
Authentication Use Cases

All email-OTP login business logic.
"""

from .initiate_login_use_case import InitiateLoginUseCase
from .resend_login_code_use_case import ResendLoginCodeUseCase
from .verify_login_code_use_case import VerifyLoginCodeUseCase
from .dtos import (
    InitiateLoginResponse,
    ResendLoginCodeResponse,
    RetryLaterError,
    VerifyLoginResponse,
)

__all__ = [
    # Use Cases
    "InitiateLoginUseCase",
    "ResendLoginCodeUseCase",
    "VerifyLoginCodeUseCase",
    # DTOs - Responses
    "InitiateLoginResponse",
    "ResendLoginCodeResponse",
    "RetryLaterError",
    "VerifyLoginResponse",
]
