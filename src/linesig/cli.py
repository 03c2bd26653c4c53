"""linesig CLI - Sign and verify webhook payloads, run the receiver."""

import sys
from typing import BinaryIO

import click
from rich.console import Console

from linesig.common.logging import setup_logging
from linesig.common.settings import Settings
from linesig.middleware import ChannelSecretError
from linesig.signature import (
    compute_signature,
    import_key_from_channel_secret,
    validate_signature,
)

console = Console()

SECRET_ENVVAR = "LINESIG_CHANNEL_SECRET"


@click.group()
@click.version_option(package_name="linesig")
def cli() -> None:
    """linesig CLI - LINE webhook signature tools."""


@cli.command()
@click.option(
    "--secret",
    "-s",
    envvar=SECRET_ENVVAR,
    required=True,
    help=f"Channel secret (or set {SECRET_ENVVAR})",
)
@click.option(
    "--file",
    "-f",
    "body_file",
    type=click.File("rb"),
    default="-",
    help="File holding the exact body bytes (default: stdin)",
)
def sign(secret: str, body_file: BinaryIO) -> None:
    """Print the x-line-signature value for a request body."""
    body = body_file.read()
    click.echo(compute_signature(secret, body))


@cli.command()
@click.option(
    "--secret",
    "-s",
    envvar=SECRET_ENVVAR,
    required=True,
    help=f"Channel secret (or set {SECRET_ENVVAR})",
)
@click.option("--signature", required=True, help="Signature header value to check")
@click.option(
    "--file",
    "-f",
    "body_file",
    type=click.File("rb"),
    default="-",
    help="File holding the exact body bytes (default: stdin)",
)
def verify(secret: str, signature: str, body_file: BinaryIO) -> None:
    """Check a signature against a request body."""
    body = body_file.read()
    key = import_key_from_channel_secret(secret)

    if validate_signature(body, key, signature):
        console.print("[green]valid[/green]")
        return

    console.print("[red]invalid[/red]")
    sys.exit(1)


@cli.command()
@click.option("--host", default=None, help="Interface to bind (default from settings)")
@click.option("--port", type=int, default=None, help="Port to listen on (default from settings)")
def serve(host: str | None, port: int | None) -> None:
    """Run the webhook receiver."""
    import uvicorn

    from linesig.receiver.main import create_app

    overrides = {key: value for key, value in {"host": host, "port": port}.items() if value is not None}
    settings = Settings(**overrides)
    setup_logging(settings.log_level, json_logs=settings.log_json)

    try:
        app = create_app(settings)
    except ChannelSecretError:
        console.print(f"[red]Channel secret not configured; set {SECRET_ENVVAR}[/red]")
        sys.exit(1)

    console.print(
        f"[bold]Listening on {settings.host}:{settings.port}{settings.callback_path}[/bold]"
    )
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
