"""Webhook receiver - accepts signed LINE webhook deliveries."""

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
import uvicorn

from linesig.common.errors import ErrorCode, error_response
from linesig.common.logging import get_logger, setup_logging
from linesig.common.metrics import metrics_endpoint
from linesig.common.settings import Settings, get_settings
from linesig.middleware import line_bot_middleware

logger = get_logger(__name__)


async def handle_callback(request: Request) -> JSONResponse:
    """Acknowledge a verified webhook delivery."""
    try:
        payload = await request.json()
    except ValueError:
        return error_response(ErrorCode.INVALID_JSON, "Invalid JSON body", status_code=400)

    events = payload.get("events", []) if isinstance(payload, dict) else []
    logger.info(
        "Webhook received",
        events=len(events) if isinstance(events, list) else 0,
        destination=payload.get("destination") if isinstance(payload, dict) else None,
    )
    return JSONResponse({"status": "ok"})


async def handle_health(_request: Request) -> JSONResponse:
    """Health check."""
    return JSONResponse({"status": "healthy"})


def create_app(settings: Settings | None = None) -> Starlette:
    """
    Create the Starlette application.

    The signature middleware is attached to the callback route itself so no
    other middleware can read or alter the body before it is verified.

    Raises:
        ChannelSecretError: If no channel secret is configured
    """
    settings = settings or get_settings()
    signature_middleware = line_bot_middleware(
        settings.channel_secret,
        header_name=settings.signature_header,
    )

    routes = [
        Route(
            settings.callback_path,
            handle_callback,
            methods=["POST"],
            middleware=[Middleware(signature_middleware)],
        ),
        Route("/health", handle_health, methods=["GET"]),
    ]
    if settings.metrics_enabled:
        routes.append(Route("/metrics", metrics_endpoint, methods=["GET"]))

    logger.info(
        "Webhook receiver configured",
        callback_path=settings.callback_path,
        signature_header=settings.signature_header,
    )
    return Starlette(routes=routes)


def main() -> None:
    """Entry point for the webhook receiver."""
    settings = get_settings()
    setup_logging(settings.log_level, json_logs=settings.log_json)
    app = create_app(settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
