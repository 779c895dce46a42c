"""
Access-token wire codec.

Token layout (no separators between the three top-level segments):

    token     := VERSION app_id base64(pack)
    pack      := signature(32) channel_hash(i32) subject_hash(i32) message
    message   := count(i32) (code(i32) expiry(i32)) * count, codes ascending
    signature := HMAC-SHA256(key=app_certificate,
                             data=app_id || channel_name || subject_id || message)

All integers are 4-byte big-endian. The channel/subject hashes are the
first four bytes of SHA-256 of the UTF-8 string, read as a signed int.
"""

import base64
import binascii
import hashlib
import struct
from dataclasses import dataclass
from typing import Tuple

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from rtctoken.credentials import is_valid_hex32
from rtctoken.errors import CryptoError, MalformedTokenError
from rtctoken.privileges import PrivilegeSet

# =============================================================================
# Constants
# =============================================================================

VERSION = "006"
VERSION_LENGTH = len(VERSION)
APP_ID_LENGTH = 32
SIGNATURE_LENGTH = 32

_INT32 = struct.Struct(">i")
_ENTRY = struct.Struct(">ii")

# signature + two fingerprints + privilege count
_PACK_HEADER_LENGTH = SIGNATURE_LENGTH + 3 * _INT32.size


def pack_int32(value: int) -> bytes:
    return _INT32.pack(value)


# =============================================================================
# Message / Signature / Fingerprint
# =============================================================================


def serialize_message(privileges: PrivilegeSet) -> bytes:
    """Serialize a privilege set: count followed by (code, expiry) pairs in code order."""
    parts = [pack_int32(len(privileges))]
    for privilege, expiry in privileges.items():
        parts.append(_ENTRY.pack(int(privilege), expiry))
    return b"".join(parts)


def compute_signature(
    app_certificate: str,
    app_id: str,
    channel_name: str,
    subject_id: str,
    message: bytes,
) -> bytes:
    """
    HMAC-SHA256 over app_id || channel_name || subject_id || message.

    Raises:
        CryptoError: If the runtime's crypto backend cannot provide HMAC-SHA256.
    """
    try:
        mac = hmac.HMAC(app_certificate.encode("utf-8"), hashes.SHA256())
    except UnsupportedAlgorithm as e:
        raise CryptoError(f"HMAC-SHA256 unavailable: {e}") from e

    mac.update(app_id.encode("utf-8"))
    mac.update(channel_name.encode("utf-8"))
    mac.update(subject_id.encode("utf-8"))
    mac.update(message)
    return mac.finalize()


def fingerprint(value: str) -> int:
    """
    Signed 32-bit fingerprint of a channel name or subject id.

    This is the first four bytes of SHA-256, not a CRC32, and the empty
    string has a fingerprint like any other.
    """
    digest = hashlib.sha256(value.encode("utf-8")).digest()
    return _INT32.unpack_from(digest)[0]


# =============================================================================
# Pack / Encode
# =============================================================================


def assemble_pack(signature: bytes, channel_hash: int, subject_hash: int, message: bytes) -> bytes:
    return signature + pack_int32(channel_hash) + pack_int32(subject_hash) + message


def encode_token(app_id: str, pack: bytes) -> str:
    """Prefix the version and raw app id to the base64-encoded pack."""
    return VERSION + app_id + base64.b64encode(pack).decode("ascii")


# =============================================================================
# Inspection
# =============================================================================


@dataclass(frozen=True)
class TokenParts:
    """The decoded fields of a token. Produced without checking the signature."""

    version: str
    app_id: str
    signature: bytes
    channel_hash: int
    subject_hash: int
    privileges: Tuple[Tuple[int, int], ...]

    @property
    def message(self) -> bytes:
        parts = [pack_int32(len(self.privileges))]
        parts.extend(_ENTRY.pack(code, expiry) for code, expiry in self.privileges)
        return b"".join(parts)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "app_id": self.app_id,
            "signature": self.signature.hex(),
            "channel_hash": self.channel_hash,
            "subject_hash": self.subject_hash,
            "privileges": [{"code": c, "expiry": e} for c, e in self.privileges],
        }


def parse_token(token: str) -> TokenParts:
    """
    Split a token into its fields.

    Only the structure is checked. The signature is returned as-is and is
    not verified, so a parsed token must not be treated as trusted.

    Raises:
        MalformedTokenError: If the string does not have the token layout.
    """
    if not isinstance(token, str) or not token.startswith(VERSION):
        raise MalformedTokenError(f"Token must start with version {VERSION!r}")

    app_id = token[VERSION_LENGTH : VERSION_LENGTH + APP_ID_LENGTH]
    if not is_valid_hex32(app_id):
        raise MalformedTokenError("Token does not carry a 32-character hex app id")

    try:
        pack = base64.b64decode(token[VERSION_LENGTH + APP_ID_LENGTH :], validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedTokenError(f"Token payload is not valid base64: {e}") from e

    if len(pack) < _PACK_HEADER_LENGTH:
        raise MalformedTokenError(f"Token payload too short: {len(pack)} bytes")

    signature = pack[:SIGNATURE_LENGTH]
    channel_hash, subject_hash, count = struct.unpack_from(">iii", pack, SIGNATURE_LENGTH)

    body = pack[_PACK_HEADER_LENGTH:]
    if count < 0 or len(body) != count * _ENTRY.size:
        raise MalformedTokenError(
            f"Privilege count {count} does not match {len(body)} payload bytes"
        )

    privileges = tuple(_ENTRY.iter_unpack(body))
    return TokenParts(
        version=VERSION,
        app_id=app_id,
        signature=signature,
        channel_hash=channel_hash,
        subject_hash=subject_hash,
        privileges=privileges,
    )
