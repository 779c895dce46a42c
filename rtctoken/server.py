#!/usr/bin/env python3
"""
rtctoken HTTP Service

Issues access tokens over HTTP for browser clients.

Usage:
    # Start the service
    rtctoken-server

    # Or with uvicorn for production
    uvicorn rtctoken.server:app --host 0.0.0.0 --port 8080

Endpoints:
    GET /rtm-token?uid=...                    - Messaging login token
    GET /media-token?channelName=...&uid=...  - Join + publish audio/video token
    GET /status                               - Health check
    GET /metrics                              - Prometheus metrics

Credentials are read from RTCTOKEN_APP_ID / RTCTOKEN_APP_CERTIFICATE.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from prometheus_client import CONTENT_TYPE_LATEST

from rtctoken import __version__, config
from rtctoken.builder import TokenBuilder
from rtctoken.credentials import Credential
from rtctoken.errors import (
    ConfigurationError,
    CryptoError,
    InvalidCredentialError,
    InvalidParameterError,
)
from rtctoken.metrics import get_metrics
from rtctoken.validation import default_expiry, validate_identifier

logger = logging.getLogger("rtctoken.server")


# =============================================================================
# Pydantic Models
# =============================================================================


class RtmTokenResponse(BaseModel):
    token: str
    uid: str


class MediaTokenResponse(BaseModel):
    token: str
    channelName: str
    uid: str


class StatusResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    configured: bool


# =============================================================================
# Validation / Dependencies
# =============================================================================


def get_credential() -> Credential:
    """Service credential, read from the environment on each request."""
    return Credential.from_env()


def get_builder(credential: Credential = Depends(get_credential)) -> TokenBuilder:
    return TokenBuilder(credential)


def get_expiry() -> int:
    """Configured expiry, rejected with the configuration envelope if out of range."""
    return default_expiry()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="rtctoken",
    description="Issues signed access tokens for real-time channels and messaging",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidParameterError)
async def handle_invalid_parameter(request: Request, exc: InvalidParameterError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid parameters", "message": str(exc)},
    )


@app.exception_handler(InvalidCredentialError)
async def handle_invalid_credential(request: Request, exc: InvalidCredentialError):
    logger.error(f"Token service misconfigured: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid configuration", "message": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def handle_configuration_error(request: Request, exc: ConfigurationError):
    logger.error(f"Token service misconfigured: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid configuration", "message": str(exc)},
    )


@app.exception_handler(CryptoError)
async def handle_crypto_error(request: Request, exc: CryptoError):
    logger.critical(f"Token signing unavailable: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Token generation failed", "message": str(exc)},
    )


# =============================================================================
# Endpoints
# =============================================================================


@app.get("/rtm-token", response_model=RtmTokenResponse)
async def get_rtm_token(
    uid: Optional[str] = None,
    builder: TokenBuilder = Depends(get_builder),
    expiry: int = Depends(get_expiry),
):
    """Messaging-service login token for ``uid``."""
    uid = validate_identifier(uid, "UID")
    token = builder.build_messaging_token(uid, expiry)
    logger.info(f"Issued RTM token for uid={uid}")
    return RtmTokenResponse(token=token, uid=uid)


@app.get("/media-token", response_model=MediaTokenResponse)
async def get_media_token(
    channel_name: Optional[str] = Query(None, alias="channelName"),
    uid: Optional[str] = None,
    builder: TokenBuilder = Depends(get_builder),
    expiry: int = Depends(get_expiry),
):
    """Join + publish token for ``uid`` in ``channelName``."""
    uid = validate_identifier(uid, "UID")
    channel_name = validate_identifier(channel_name, "Channel name")
    token = builder.build_media_token(channel_name, uid, expiry)
    logger.info(f"Issued media token for channel={channel_name} uid={uid}")
    return MediaTokenResponse(token=token, channelName=channel_name, uid=uid)


@app.get("/status", response_model=StatusResponse)
async def get_status():
    """Health check endpoint."""
    try:
        get_credential()
        configured = True
    except InvalidCredentialError:
        configured = False

    return StatusResponse(status="ok", version=__version__, configured=configured)


@app.get("/metrics")
async def get_prometheus_metrics():
    return Response(content=get_metrics().get_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)


# =============================================================================
# Main Entry Point
# =============================================================================


def main():
    """Run the token service."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # refuse to start with an expiry that cannot be written into a token
    default_expiry()

    logger.info(f"Starting rtctoken service on http://{config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="info")


if __name__ == "__main__":
    main()
