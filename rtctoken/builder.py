"""
rtctoken Builder - Issues HMAC-signed access tokens.

This module composes the codec steps (serialize -> sign -> pack -> encode)
into the public build operations. Every build reads only its arguments;
credentials are passed in explicitly or held by a TokenBuilder instance.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from rtctoken import codec
from rtctoken.credentials import Credential, validate_credentials
from rtctoken.errors import CryptoError, InvalidCredentialError
from rtctoken.metrics import TokenMetrics, get_metrics
from rtctoken.privileges import PrivilegeSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenRequest:
    """Everything one build needs. Lives only for the duration of the call."""

    app_id: str
    app_certificate: str = field(repr=False)
    channel_name: str
    subject_id: str
    privileges: PrivilegeSet = field(default_factory=PrivilegeSet)

    def __post_init__(self):
        # plain mappings would serialize in insertion order
        if not isinstance(self.privileges, PrivilegeSet):
            object.__setattr__(self, "privileges", PrivilegeSet(self.privileges))


def build_token(
    request: TokenRequest,
    metrics: Optional[TokenMetrics] = None,
    kind: str = "custom",
) -> str:
    """
    Build a signed access token.

    Args:
        request: Credentials, channel, subject and privileges.
        metrics: Collector to record into (the global one if None).
        kind: Label recorded on the issued-tokens metric.

    Returns:
        ``"006" + app_id + base64(pack)``.

    Raises:
        InvalidCredentialError: If app_id or app_certificate is not 32 hex chars.
        CryptoError: If HMAC-SHA256 is unavailable.
    """
    metrics = metrics or get_metrics()

    try:
        validate_credentials(request.app_id, request.app_certificate)
    except InvalidCredentialError as e:
        logger.warning(f"Rejected token request for subject {request.subject_id!r}: {e}")
        metrics.record_failure("invalid_credential")
        raise

    with metrics.build_timer():
        message = codec.serialize_message(request.privileges)
        try:
            signature = codec.compute_signature(
                request.app_certificate,
                request.app_id,
                request.channel_name,
                request.subject_id,
                message,
            )
        except CryptoError:
            logger.error("HMAC-SHA256 unavailable; cannot sign tokens")
            metrics.record_failure("crypto")
            raise

        pack = codec.assemble_pack(
            signature,
            codec.fingerprint(request.channel_name),
            codec.fingerprint(request.subject_id),
            message,
        )
        token = codec.encode_token(request.app_id, pack)

    metrics.record_token_issued(kind)
    logger.debug(
        f"Issued {kind} token: app_id={request.app_id} channel={request.channel_name!r} "
        f"subject={request.subject_id!r} privileges={[int(p) for p in request.privileges]}"
    )
    return token


def build_messaging_token(
    app_id: str, app_certificate: str, subject_id: str, expiry: int
) -> str:
    """Token for messaging-service login: empty channel, RTM_LOGIN only."""
    request = TokenRequest(
        app_id=app_id,
        app_certificate=app_certificate,
        channel_name="",
        subject_id=subject_id,
        privileges=PrivilegeSet.messaging(expiry),
    )
    return build_token(request, kind="messaging")


def build_media_token(
    app_id: str, app_certificate: str, channel_name: str, subject_id: str, expiry: int
) -> str:
    """Token to join a channel and publish audio and video, all with one expiry."""
    request = TokenRequest(
        app_id=app_id,
        app_certificate=app_certificate,
        channel_name=channel_name,
        subject_id=subject_id,
        privileges=PrivilegeSet.media(expiry),
    )
    return build_token(request, kind="media")


class TokenBuilder:
    """
    Issues tokens for one application credential.

    Example:
        >>> builder = TokenBuilder(Credential(app_id, app_certificate))
        >>> token = builder.build_media_token("room1", "user42", expiry=86400)
        >>> token[:3]
        '006'
    """

    def __init__(self, credential: Credential, metrics: Optional[TokenMetrics] = None):
        """
        Args:
            credential: Validated app id / certificate pair.
            metrics: Optional collector; defaults to the global one.
        """
        self.credential = credential
        self._metrics = metrics

    @classmethod
    def from_env(cls, metrics: Optional[TokenMetrics] = None) -> "TokenBuilder":
        return cls(Credential.from_env(), metrics=metrics)

    @property
    def app_id(self) -> str:
        return self.credential.app_id

    def build(
        self,
        channel_name: str,
        subject_id: str,
        privileges: PrivilegeSet,
        kind: str = "custom",
    ) -> str:
        request = TokenRequest(
            app_id=self.credential.app_id,
            app_certificate=self.credential.app_certificate,
            channel_name=channel_name,
            subject_id=subject_id,
            privileges=privileges,
        )
        return build_token(request, metrics=self._metrics, kind=kind)

    def build_messaging_token(self, subject_id: str, expiry: int) -> str:
        return self.build("", subject_id, PrivilegeSet.messaging(expiry), kind="messaging")

    def build_media_token(self, channel_name: str, subject_id: str, expiry: int) -> str:
        return self.build(channel_name, subject_id, PrivilegeSet.media(expiry), kind="media")
