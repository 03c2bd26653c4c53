"""Pytest configuration and fixtures."""

import json

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from linesig.common.settings import Settings
from linesig.middleware import LineSignatureMiddleware
from linesig.signature import VerificationKey, import_key_from_channel_secret

CHANNEL_SECRET = "test_secret"
VALID_SIGNATURE = "t7Hn4ZDHqs6e+wdvI5TyQIvzie0DmMUmuXEBqyyE/tM="
INVALID_SIGNATURE = "t7Hn4ZDHqs6e+wdvi5TyQivzie0DmMUmuXEBqyyE/tM="


@pytest.fixture
def channel_secret() -> str:
    """Channel secret used by the signature fixtures."""
    return CHANNEL_SECRET


@pytest.fixture
def body() -> bytes:
    """Exact body bytes the fixture signatures were computed over."""
    return json.dumps({"hello": "world"}, separators=(",", ":")).encode("utf-8")


@pytest.fixture
def key(channel_secret: str) -> VerificationKey:
    """Verification key for the test channel."""
    return import_key_from_channel_secret(channel_secret)


@pytest.fixture
def settings(channel_secret: str) -> Settings:
    """Create test settings."""
    return Settings(
        channel_secret=channel_secret,
        callback_path="/callback",
        metrics_enabled=True,
    )


@pytest.fixture
def protected_app(channel_secret: str) -> Starlette:
    """App whose single POST route is guarded by the signature middleware."""

    async def webhook(request: Request) -> Response:
        return Response(await request.body(), status_code=200, media_type="application/json")

    app = Starlette(routes=[Route("/", webhook, methods=["POST"])])
    app.add_middleware(LineSignatureMiddleware, channel_secret=channel_secret)
    return app


@pytest.fixture
def valid_signature() -> str:
    """Signature of ``body`` under ``channel_secret``."""
    return VALID_SIGNATURE


@pytest.fixture
def invalid_signature() -> str:
    """``valid_signature`` with two characters case-flipped."""
    return INVALID_SIGNATURE
