"""
Exception types raised by the token codec.

Callers need to tell a malformed credential (fix the configuration, do not
retry) apart from a broken crypto runtime (fatal), so each gets its own class.
"""


class TokenError(Exception):
    """Base exception for rtctoken errors."""

    pass


class InvalidCredentialError(TokenError, ValueError):
    """Raised when the app id or app certificate is not a 32-character hex string."""

    def __init__(self, message: str = "Invalid appId or appCertificate"):
        super().__init__(message)


class CryptoError(TokenError):
    """Raised when the HMAC-SHA256 primitive cannot be initialized or run."""

    def __init__(self, message: str = "HMAC-SHA256 is not available in this runtime"):
        super().__init__(message)


class InvalidParameterError(TokenError, ValueError):
    """Raised when a uid or channel name fails caller-side validation."""

    pass


class ConfigurationError(TokenError, ValueError):
    """Raised when a configured value (other than the credential) is unusable."""

    pass


class MalformedTokenError(TokenError, ValueError):
    """Raised when a string does not have the shape of an access token."""

    pass
