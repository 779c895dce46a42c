"""
rtctoken - Signed access tokens for real-time channels and messaging.

This package builds short-lived, HMAC-signed tokens that let a client join a
channel, publish audio/video, or log into the messaging service without the
authorization server being consulted on every request.
"""

__version__ = "1.0.0"

# Core token building
from .builder import (
    TokenBuilder,
    TokenRequest,
    build_media_token,
    build_messaging_token,
    build_token,
)
from .codec import TokenParts, parse_token
from .credentials import Credential, validate_credentials
from .errors import (
    ConfigurationError,
    CryptoError,
    InvalidCredentialError,
    InvalidParameterError,
    MalformedTokenError,
    TokenError,
)
from .metrics import TokenMetrics, get_metrics
from .privileges import Privilege, PrivilegeSet


# HTTP service (lazy import so fastapi is only loaded when the app is used)
def __getattr__(name):
    """Lazy loading of the service layer."""
    if name == "app":
        from .server import app

        return app
    raise AttributeError(f"module 'rtctoken' has no attribute '{name}'")


__all__ = [
    "__version__",
    # Core
    "TokenBuilder",
    "TokenRequest",
    "build_token",
    "build_media_token",
    "build_messaging_token",
    "Credential",
    "validate_credentials",
    "Privilege",
    "PrivilegeSet",
    # Inspection
    "TokenParts",
    "parse_token",
    # Errors
    "TokenError",
    "InvalidCredentialError",
    "CryptoError",
    "MalformedTokenError",
    "InvalidParameterError",
    "ConfigurationError",
    # Metrics
    "TokenMetrics",
    "get_metrics",
    # Lazy loaded
    "app",
]
