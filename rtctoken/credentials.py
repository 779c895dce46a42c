"""
Application credentials and their validation.

The app id travels in the clear inside every token. The app certificate is
the shared HMAC secret: it is only ever handed to the signer and must never
be logged or emitted.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from rtctoken import config
from rtctoken.errors import InvalidCredentialError

_HEX32 = re.compile(r"[0-9a-fA-F]{32}")


def is_valid_hex32(value: Optional[str]) -> bool:
    """True if ``value`` is exactly 32 hexadecimal characters."""
    return isinstance(value, str) and _HEX32.fullmatch(value) is not None


def validate_credentials(app_id: Optional[str], app_certificate: Optional[str]) -> None:
    """
    Check both credential halves before any cryptographic work.

    Raises:
        InvalidCredentialError: If either value is not a 32-character hex string.
    """
    if not is_valid_hex32(app_id):
        raise InvalidCredentialError("appId must be 32 hexadecimal characters")
    if not is_valid_hex32(app_certificate):
        raise InvalidCredentialError("appCertificate must be 32 hexadecimal characters")


@dataclass(frozen=True)
class Credential:
    """
    A validated (app id, app certificate) pair.

    Example:
        >>> cred = Credential("a1b2c3d4e5f60718293a4b5c6d7e8f90",
        ...                   "00112233445566778899aabbccddeeff")
        >>> cred
        Credential(app_id='a1b2c3d4e5f60718293a4b5c6d7e8f90')
    """

    app_id: str
    app_certificate: str = field(repr=False)

    def __post_init__(self):
        validate_credentials(self.app_id, self.app_certificate)

    @classmethod
    def from_env(cls) -> "Credential":
        """
        Build a credential from RTCTOKEN_APP_ID / RTCTOKEN_APP_CERTIFICATE.

        Raises:
            InvalidCredentialError: If a variable is missing or malformed.
        """
        app_id = config.get_app_id()
        app_certificate = config.get_app_certificate()
        if not app_id or not app_certificate:
            raise InvalidCredentialError(
                f"Missing credentials. Set {config.APP_ID_ENV} and {config.APP_CERTIFICATE_ENV}"
            )
        return cls(app_id=app_id, app_certificate=app_certificate)
