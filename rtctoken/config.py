# rtctoken/config.py
"""
Centralized configuration for rtctoken.

All configurable values are read from environment variables with sensible defaults.
This allows different environments (dev, staging, production) to use different
settings without code changes.

Usage:
    from rtctoken.config import DEFAULT_EXPIRY, MAX_IDENTIFIER_LENGTH

Environment Variables:
    RTCTOKEN_APP_ID: Application id, 32 hex characters (no default)
    RTCTOKEN_APP_CERTIFICATE: Application certificate, 32 hex characters (no default)
    RTCTOKEN_DEFAULT_EXPIRY: Expiry value written into issued tokens (default: 86400)
    RTCTOKEN_MAX_IDENTIFIER_LENGTH: Longest accepted uid/channel name (default: 64)
    RTCTOKEN_HOST / RTCTOKEN_PORT: HTTP service binding (default: 127.0.0.1:8080)
"""

import os
from typing import Final, Optional

# =============================================================================
# Credentials
# =============================================================================

APP_ID_ENV: Final[str] = "RTCTOKEN_APP_ID"
APP_CERTIFICATE_ENV: Final[str] = "RTCTOKEN_APP_CERTIFICATE"


def get_app_id() -> Optional[str]:
    """Read the app id from the environment at call time."""
    return os.getenv(APP_ID_ENV)


def get_app_certificate() -> Optional[str]:
    """Read the app certificate from the environment at call time."""
    return os.getenv(APP_CERTIFICATE_ENV)


# =============================================================================
# Token Defaults
# =============================================================================

# Written into the token verbatim; the builder never adds the current time
DEFAULT_EXPIRY: Final[int] = int(os.getenv("RTCTOKEN_DEFAULT_EXPIRY", "86400"))

# Caller-side limit for uid and channel name
MAX_IDENTIFIER_LENGTH: Final[int] = int(os.getenv("RTCTOKEN_MAX_IDENTIFIER_LENGTH", "64"))

# =============================================================================
# HTTP Service
# =============================================================================

HOST: Final[str] = os.getenv("RTCTOKEN_HOST", "127.0.0.1")

PORT: Final[int] = int(os.getenv("RTCTOKEN_PORT", "8080"))


# =============================================================================
# Configuration Summary (for debugging)
# =============================================================================


def print_config() -> None:
    """Print current configuration (the certificate is only reported as set/unset)."""
    print("rtctoken configuration:")
    print(f"  APP_ID:                {get_app_id() or '(unset)'}")
    print(f"  APP_CERTIFICATE:       {'(set)' if get_app_certificate() else '(unset)'}")
    print(f"  DEFAULT_EXPIRY:        {DEFAULT_EXPIRY}")
    print(f"  MAX_IDENTIFIER_LENGTH: {MAX_IDENTIFIER_LENGTH}")
    print(f"  HOST:                  {HOST}")
    print(f"  PORT:                  {PORT}")


if __name__ == "__main__":
    print_config()
