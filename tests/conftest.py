"""
Shared pytest fixtures for rtctoken tests.
"""

import pytest

from rtctoken import Credential, PrivilegeSet, TokenBuilder, TokenMetrics

APP_ID = "a1b2c3d4e5f60718293a4b5c6d7e8f90"
APP_CERTIFICATE = "00112233445566778899aabbccddeeff"


@pytest.fixture
def app_id() -> str:
    return APP_ID


@pytest.fixture
def app_certificate() -> str:
    return APP_CERTIFICATE


@pytest.fixture
def credential() -> Credential:
    """A valid credential with synthetic keys."""
    return Credential(app_id=APP_ID, app_certificate=APP_CERTIFICATE)


@pytest.fixture
def metrics() -> TokenMetrics:
    """A private metrics collector so tests do not share counters."""
    return TokenMetrics(namespace="rtctoken_test")


@pytest.fixture
def builder(credential: Credential, metrics: TokenMetrics) -> TokenBuilder:
    return TokenBuilder(credential, metrics=metrics)


@pytest.fixture
def media_privileges() -> PrivilegeSet:
    return PrivilegeSet.media(86400)


@pytest.fixture
def credential_env(monkeypatch):
    """Expose the test credential through the environment."""
    monkeypatch.setenv("RTCTOKEN_APP_ID", APP_ID)
    monkeypatch.setenv("RTCTOKEN_APP_CERTIFICATE", APP_CERTIFICATE)


@pytest.fixture
def no_credential_env(monkeypatch):
    monkeypatch.delenv("RTCTOKEN_APP_ID", raising=False)
    monkeypatch.delenv("RTCTOKEN_APP_CERTIFICATE", raising=False)
