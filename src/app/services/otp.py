"""
One-time code generation.

Codes come from the ``secrets`` CSPRNG so they cannot be predicted from
earlier codes.
"""

import secrets
import string


def generate_otp(length: int = 6) -> str:
    """
    Generate a numeric one-time code.

    Args:
        length: Number of digits (leading zeros allowed)

    Returns:
        String of exactly ``length`` decimal digits

    Raises:
        ValueError: If length is not a positive integer
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise ValueError("OTP length must be a positive integer")

    return "".join(secrets.choice(string.digits) for _ in range(length))
