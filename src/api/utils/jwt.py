from datetime import UTC, datetime
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from config import ApplicationConfig
from libs.result import Error, Result, Return

ALGORITHM = "HS256"


class CredentialPayload(BaseModel):
    """Claims carried by the session credential"""

    user_id: str
    role: str
    issued_at: int  # Unix seconds


class CredentialSigner:
    """
    Signs and verifies session credentials (HS256 JWT).

    The secret is fixed for the signer's lifetime; a signer built with a
    different secret rejects every token issued by this one.
    """

    def __init__(self, secret: str, max_age_seconds: int):
        if not secret:
            raise ValueError("Credential secret must not be empty")
        self.secret = secret
        self.max_age_seconds = max_age_seconds

    def sign(self, payload: CredentialPayload) -> str:
        """
        Sign a credential payload

        Args:
            payload: user_id, role and issued_at

        Returns:
            JWT token string; deterministic for a given secret and payload
        """
        claims = {
            "user_id": payload.user_id,
            "role": payload.role,
            "iat": payload.issued_at,
            "exp": payload.issued_at + self.max_age_seconds,
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Result[CredentialPayload]:
        """
        Verify and decode a credential

        Args:
            token: JWT token string

        Returns:
            Result with the decoded payload, or SIGNATURE_INVALID for a
            malformed, tampered, foreign or expired token
        """
        invalid = Error("SIGNATURE_INVALID", "Invalid or expired session credential")
        if not token:
            return Return.err(invalid)

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require_iat": True, "require_exp": True},
            )
        except JWTError:
            return Return.err(invalid)

        user_id = claims.get("user_id")
        role = claims.get("role")
        issued_at = claims.get("iat")
        if not isinstance(user_id, str) or not isinstance(role, str) or not isinstance(issued_at, int):
            return Return.err(invalid)

        return Return.ok(CredentialPayload(user_id=user_id, role=role, issued_at=issued_at))


_signer: Optional[CredentialSigner] = None


def get_signer() -> CredentialSigner:
    """Process-wide signer bound to ApplicationConfig.SESSION_SECRET"""
    global _signer
    if _signer is None:
        _signer = CredentialSigner(
            ApplicationConfig.SESSION_SECRET, ApplicationConfig.SESSION_MAX_AGE_SECONDS
        )
    return _signer


def sign_session(user_id: str, role: str) -> str:
    """Mint a credential issued now"""
    issued_at = int(datetime.now(UTC).timestamp())
    return get_signer().sign(
        CredentialPayload(user_id=user_id, role=role, issued_at=issued_at)
    )


def verify_session(token: Optional[str]) -> Result[CredentialPayload]:
    return get_signer().verify(token)
