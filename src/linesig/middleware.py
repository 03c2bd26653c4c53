"""Webhook signature middleware."""

from __future__ import annotations

import time
from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from linesig.common.errors import ErrorCode, error_response
from linesig.common.logging import get_logger
from linesig.common.metrics import record_signature_check
from linesig.signature import (
    VerificationKey,
    import_key_from_channel_secret,
    validate_signature,
)

logger = get_logger(__name__)

SIGNATURE_HEADER = "x-line-signature"

NO_SIGNATURE = "no signature"
SIGNATURE_VALIDATION_FAILED = "signature validation failed"

_OUTCOMES = {
    None: "accepted",
    NO_SIGNATURE: "no_signature",
    SIGNATURE_VALIDATION_FAILED: "invalid_signature",
}


class ChannelSecretError(TypeError):
    """Channel secret missing or not a string."""

    pass


@dataclass(frozen=True)
class SignatureCheck:
    """Outcome of checking one request's signature."""

    accepted: bool
    status_code: int | None = None
    reason: str | None = None

    @classmethod
    def accept(cls) -> SignatureCheck:
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> SignatureCheck:
        return cls(accepted=False, status_code=401, reason=reason)


def _derive_key(channel_secret: str | None) -> VerificationKey:
    if not isinstance(channel_secret, str) or not channel_secret:
        raise ChannelSecretError("no channel secret")
    return import_key_from_channel_secret(channel_secret)


def check_signature(
    signature: str | None,
    body: bytes,
    key: VerificationKey,
) -> SignatureCheck:
    """
    Decide whether a request with this signature header and body is accepted.

    Args:
        signature: Signature header value, or None when absent
        body: Raw request body
        key: Verification key for the channel

    Returns:
        Accepted check, or a 401 rejection with a fixed reason
    """
    if not signature:
        return SignatureCheck.reject(NO_SIGNATURE)

    if not validate_signature(body, key, signature):
        return SignatureCheck.reject(SIGNATURE_VALIDATION_FAILED)

    return SignatureCheck.accept()


class LineSignatureMiddleware(BaseHTTPMiddleware):
    """
    Reject webhook requests that are not signed with the channel secret.

    Must run before anything else reads or transforms the request body: the
    signature covers the exact bytes on the wire. Starlette caches the body
    read here and replays it to the downstream app.
    """

    def __init__(
        self,
        app: ASGIApp,
        channel_secret: str | None = None,
        *,
        key: VerificationKey | None = None,
        header_name: str = SIGNATURE_HEADER,
    ) -> None:
        """
        Initialize signature middleware.

        Args:
            app: ASGI application to protect
            channel_secret: Channel secret (ignored when ``key`` is given)
            key: Pre-derived verification key shared between instances
            header_name: Header carrying the signature

        Raises:
            ChannelSecretError: If no usable channel secret was supplied
        """
        super().__init__(app)
        self._key = key if key is not None else _derive_key(channel_secret)
        self._header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Verify the request signature, then forward or reject."""
        start = time.perf_counter()

        signature = request.headers.get(self._header_name)
        if signature:
            body = await request.body()
            result = check_signature(signature, body, self._key)
        else:
            result = SignatureCheck.reject(NO_SIGNATURE)

        record_signature_check(_OUTCOMES[result.reason], time.perf_counter() - start)

        if not result.accepted:
            logger.warning(
                "Webhook signature rejected",
                reason=result.reason,
                method=request.method,
                path=request.url.path,
            )
            return error_response(
                ErrorCode.UNAUTHORIZED,
                result.reason or SIGNATURE_VALIDATION_FAILED,
                status_code=result.status_code or 401,
            )

        logger.debug("Webhook signature accepted", path=request.url.path)
        return await call_next(request)


def line_bot_middleware(
    channel_secret: str | None,
    header_name: str = SIGNATURE_HEADER,
) -> type[LineSignatureMiddleware]:
    """
    Factory function to create signature middleware for a channel.

    The secret is checked and the key derived right away, so a misconfigured
    deployment fails at startup instead of on the first webhook.

    Args:
        channel_secret: Channel secret
        header_name: Header carrying the signature

    Returns:
        Configured middleware class

    Raises:
        ChannelSecretError: If the channel secret is missing or not a string
    """
    key = _derive_key(channel_secret)

    class ConfiguredLineSignatureMiddleware(LineSignatureMiddleware):
        def __init__(self, app: ASGIApp) -> None:
            super().__init__(app, key=key, header_name=header_name)

    return ConfiguredLineSignatureMiddleware
