"""
Caller-side checks shared by the HTTP service and the CLI.

The codec itself accepts any string; these limits apply to identifiers
arriving from outside before a token is built for them.
"""

from typing import Optional

from rtctoken import config
from rtctoken.errors import ConfigurationError, InvalidParameterError
from rtctoken.privileges import INT32_MAX, INT32_MIN


def is_blank(value: str) -> bool:
    """True if every character is U+0020 or below (space and control characters)."""
    return all(ch <= "\x20" for ch in value)


def validate_identifier(value: Optional[str], label: str) -> str:
    """
    Require a non-blank identifier no longer than MAX_IDENTIFIER_LENGTH.

    Only space and control characters count as blank, so a uid made of
    other Unicode whitespace (e.g. U+3000) is accepted.

    Raises:
        InvalidParameterError: If the value is missing, blank, or too long.
    """
    if value is None or is_blank(value):
        raise InvalidParameterError(f"{label} cannot be null or empty")
    if len(value) > config.MAX_IDENTIFIER_LENGTH:
        raise InvalidParameterError(
            f"{label} cannot exceed {config.MAX_IDENTIFIER_LENGTH} characters"
        )
    return value


def default_expiry() -> int:
    """
    The configured expiry, checked against the 32-bit wire field.

    Raises:
        ConfigurationError: If RTCTOKEN_DEFAULT_EXPIRY does not fit in 32 bits.
    """
    expiry = config.DEFAULT_EXPIRY
    if not INT32_MIN <= expiry <= INT32_MAX:
        raise ConfigurationError(f"RTCTOKEN_DEFAULT_EXPIRY does not fit in 32 bits: {expiry}")
    return expiry
