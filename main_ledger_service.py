"""Mini README: Entry point CLI for launching the fintrack web adapter.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port and reload behaviour. Defaults come from
``FINTRACK_*`` environment variables via ``get_settings``.
"""

from __future__ import annotations

import typer
import uvicorn

from fintrack.configuration import get_settings
from fintrack.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch the fintrack personal ledger service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting fintrack on {effective_host}:{effective_port}.\n"
        f"Open http://{browser_host}:{effective_port}/docs to explore the API."
    )
    uvicorn.run(
        "fintrack.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
