"""
Builder API request authentication.

Privileged relayer endpoints require four headers derived from the
builder credentials:

    message   = timestamp + METHOD + path + body
    signature = urlsafe(base64(HMAC_SHA256(base64decode(secret), message)))

The URL-safe transform replaces ``+`` with ``-`` and ``/`` with ``_`` and
keeps the ``=`` padding. A fresh timestamp is taken for every request.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import time
from dataclasses import dataclass
from typing import Dict, Optional

from polyrelay.constants import (
    HEADER_API_KEY,
    HEADER_PASSPHRASE,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
)
from polyrelay.errors import SigningError
from polyrelay.types.relayer import BuilderCredentials


@dataclass(frozen=True)
class BuilderHeaders:
    """Authentication headers for one relayer request."""

    api_key: str
    signature: str
    timestamp: str
    passphrase: str

    def as_dict(self) -> Dict[str, str]:
        return {
            HEADER_API_KEY: self.api_key,
            HEADER_SIGNATURE: self.signature,
            HEADER_TIMESTAMP: self.timestamp,
            HEADER_PASSPHRASE: self.passphrase,
        }


def decode_secret(secret: str) -> bytes:
    """
    Decode a builder secret: standard base64 first, URL-safe as fallback.

    Raises:
        SigningError: If neither alphabet decodes the secret
    """
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError):
        pass
    try:
        return base64.urlsafe_b64decode(secret)
    except (binascii.Error, ValueError) as e:
        raise SigningError(f"Failed to decode secret: {e}") from e


def build_hmac_signature(
    secret: str,
    timestamp: str,
    method: str,
    path: str,
    body: Optional[str] = None,
) -> str:
    """
    Compute the URL-safe builder HMAC signature.

    Args:
        secret: Base64-encoded builder secret
        timestamp: Unix seconds as a string
        method: HTTP method (e.g. "POST")
        path: Request path (e.g. "/submit")
        body: Exact request body, or None

    Returns:
        Base64 signature in the URL-safe alphabet, padding kept
    """
    message = f"{timestamp}{method}{path}{body or ''}"
    digest = hmac.new(decode_secret(secret), message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii").replace("+", "-").replace("/", "_")


def generate_builder_headers(
    credentials: BuilderCredentials,
    method: str,
    path: str,
    body: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> BuilderHeaders:
    """
    Build the POLY_BUILDER_* headers for a request.

    Args:
        credentials: Builder API credentials
        method: HTTP method
        path: Request path
        body: Exact request body, or None
        timestamp: Override for the Unix-seconds timestamp (tests only)

    Returns:
        BuilderHeaders
    """
    timestamp = timestamp or str(int(time.time()))
    return BuilderHeaders(
        api_key=credentials.key,
        signature=build_hmac_signature(credentials.secret, timestamp, method, path, body),
        timestamp=timestamp,
        passphrase=credentials.passphrase,
    )


__all__ = [
    "BuilderHeaders",
    "decode_secret",
    "build_hmac_signature",
    "generate_builder_headers",
]
