"""gopherweb CLI: entry-point for running the gateway.

Usage:
    python cli/main.py --help

Commands:
    serve    run the Gopher server
    render   run the pipeline once for a selector and print the gophermap
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from gopherweb.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import dataclasses
from typing import Optional

import typer

from gopherweb.config import Settings, split_listen_address
from gopherweb.gateway import GopherGateway
from gopherweb.logging_config import setup_logging
from gopherweb.server import GopherServer

app = typer.Typer(
    name="gopherweb",
    help="Gopher-to-web gateway.",
    no_args_is_help=True,
)


def _settings(
    listen_address: Optional[str],
    no_security: bool,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> Settings:
    """Environment-derived settings with command-line overrides applied."""
    overrides = {}
    if listen_address is not None:
        overrides["listen_address"] = listen_address
    if no_security:
        overrides["verify_tls"] = False
    if log_level is not None:
        overrides["log_level"] = log_level
    if log_format is not None:
        overrides["log_format"] = log_format
    try:
        settings = dataclasses.replace(Settings(), **overrides)
        split_listen_address(settings.listen_address)
    except ValueError as err:
        typer.echo(f"[gopherweb] {err}", err=True)
        raise typer.Exit(2)
    return settings


@app.command("serve")
def serve(
    listen_address: Optional[str] = typer.Option(
        None, "--listen-address", help=":port or address:port to listen on (default :7000)."
    ),
    no_security: bool = typer.Option(
        False, "--no-security", help="Skip checking TLS certificates of fetched sites."
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="text | json"),
) -> None:
    """Run the Gopher server until interrupted."""
    settings = _settings(listen_address, no_security, log_level, log_format)
    try:
        setup_logging(settings.log_level, settings.log_format)
    except ValueError as err:
        typer.echo(f"[gopherweb] {err}", err=True)
        raise typer.Exit(2)

    identity = settings.identity
    with GopherGateway(settings) as gateway:
        server = GopherServer(settings.bind_address, gateway)
        typer.echo(
            "Server starting, use (e.g.) "
            f"gopher://{identity.host}:{identity.port}/1www.wikipedia.org/"
        )
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            typer.echo("")
        finally:
            server.server_close()


@app.command("render")
def render(
    selector: str = typer.Argument(..., help="Selector as a Gopher client would send it."),
    listen_address: Optional[str] = typer.Option(
        None, "--listen-address", help="Address advertised in link lines."
    ),
    no_security: bool = typer.Option(
        False, "--no-security", help="Skip checking TLS certificates of fetched sites."
    ),
) -> None:
    """Print the gophermap the gateway would serve for SELECTOR."""
    settings = _settings(listen_address, no_security)
    with GopherGateway(settings) as gateway:
        payload = gateway.handle(selector)
    typer.echo(payload.decode(settings.client_encoding, errors="replace"), nl=False)


if __name__ == "__main__":
    app()
