"""HMAC-SHA256 signature primitives for LINE webhook payloads."""

from __future__ import annotations

import base64
import hashlib
import hmac

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac


class VerificationKey:
    """
    HMAC-SHA256 key imported from a channel secret.

    The key only verifies. It never exposes the secret or a computed digest;
    each verification works on a copy of the prepared HMAC context, so one
    instance can be shared by any number of concurrent requests.
    """

    __slots__ = ("_context",)

    def __init__(self, context: crypto_hmac.HMAC) -> None:
        self._context = context

    def verify(self, body: bytes, signature: bytes) -> bool:
        """Check raw signature bytes against ``body`` in constant time."""
        context = self._context.copy()
        context.update(body)
        try:
            context.verify(signature)
        except InvalidSignature:
            return False
        return True

    def __repr__(self) -> str:
        return "VerificationKey(algorithm='HMAC-SHA256')"


def import_key_from_channel_secret(channel_secret: str) -> VerificationKey:
    """
    Import a channel secret as a verify-only HMAC-SHA256 key.

    Args:
        channel_secret: Channel secret issued by the LINE developers console

    Returns:
        Reusable verification key

    Raises:
        TypeError: If the secret is not a string
    """
    if not isinstance(channel_secret, str):
        raise TypeError(f"channel secret must be str, not {type(channel_secret).__name__}")

    key_bytes = channel_secret.encode("utf-8")
    return VerificationKey(crypto_hmac.HMAC(key_bytes, hashes.SHA256()))


def validate_signature(body: bytes, key: VerificationKey, signature: str) -> bool:
    """
    Validate a Base64 encoded signature over the exact request body bytes.

    Malformed Base64 is reported as an invalid signature rather than raised.

    Args:
        body: Raw request body as received
        key: Key from :func:`import_key_from_channel_secret`
        signature: Value of the ``x-line-signature`` header

    Returns:
        True if the signature matches the body
    """
    try:
        signature_bytes = base64.b64decode(signature, validate=True)
    except ValueError:  # binascii.Error or non-ASCII input
        return False

    return key.verify(body, signature_bytes)


def compute_signature(channel_secret: str, body: bytes) -> str:
    """Create the Base64 HMAC-SHA256 signature LINE sends for ``body``."""
    digest = hmac.new(channel_secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")
