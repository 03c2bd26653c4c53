"""
linesig: signature verification for LINE Messaging API webhooks.

Rejects webhook requests whose ``x-line-signature`` header does not carry a
valid HMAC-SHA256 signature of the raw request body before any application
code runs.
"""

from linesig.middleware import (
    ChannelSecretError,
    LineSignatureMiddleware,
    SignatureCheck,
    line_bot_middleware,
)
from linesig.signature import (
    VerificationKey,
    compute_signature,
    import_key_from_channel_secret,
    validate_signature,
)

__version__ = "1.0.0"

__all__ = [
    "ChannelSecretError",
    "LineSignatureMiddleware",
    "SignatureCheck",
    "VerificationKey",
    "compute_signature",
    "import_key_from_channel_secret",
    "line_bot_middleware",
    "validate_signature",
]
