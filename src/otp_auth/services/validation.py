"""Input-shape checks applied before anything reaches the OTP store."""

from __future__ import annotations

import re

from otp_auth.config import settings

# local-part "@" domain, where the domain has at least one dot-separated label
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)


class InputValidationError(ValueError):
    """Raised when user input is rejected; ``str(exc)`` is safe to show the user."""


def validate_email(email: str) -> str:
    """Return *email* unchanged if it looks like an address, else raise."""
    if not email or not email.strip():
        raise InputValidationError("Please enter an email address")
    if not EMAIL_PATTERN.fullmatch(email):
        raise InputValidationError("Please enter a valid email address")
    return email


def validate_code(code: str, length: int | None = None) -> str:
    """Return *code* unchanged if it is non-blank and exactly *length* characters."""
    if length is None:
        length = settings.otp_length
    if not code or not code.strip():
        raise InputValidationError("Please enter OTP")
    if len(code) != length:
        raise InputValidationError(f"OTP must be {length} digits")
    return code
