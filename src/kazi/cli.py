"""Kazi operator CLI.

Usage:
    kazi serve                 # Run the API with uvicorn
    kazi serve --reload        # ...with auto-reload for development
    kazi init-db               # Create tables in KAZI_DATABASE_URL
    kazi health                # Ask a running server for /api/health
"""

from __future__ import annotations

import asyncio
import json
import os
import sys

import click
import httpx
import pydantic

from kazi.config import Settings, load_settings

DEFAULT_API_URL = "http://localhost:8000"


def _api_url() -> str:
    return os.environ.get("KAZI_API_URL", DEFAULT_API_URL).rstrip("/")


def _settings_or_exit() -> Settings:
    """Load settings, turning a configuration error into a readable exit."""
    try:
        return load_settings()
    except pydantic.ValidationError as e:
        click.secho("Configuration error:", fg="red", err=True)
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "settings"
            click.secho(f"  KAZI_{field.upper()}: {err['msg']}", fg="red", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="kazi")
def cli():
    """Kazi job-marketplace backend."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: KAZI_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: KAZI_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    settings = _settings_or_exit()
    uvicorn.run(
        "kazi.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """Create the users, jobs and applications tables."""
    from kazi.db.engine import create_engine_for, create_tables

    settings = _settings_or_exit()

    async def _create():
        engine = create_engine_for(settings)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_create())
    click.secho("Tables created.", fg="green")


@cli.command()
@click.option("--url", default=None, help="Server base URL (default: KAZI_API_URL)")
def health(url: str | None):
    """Check a running server. Exits 1 if unreachable or degraded."""
    base = (url or _api_url()).rstrip("/")
    try:
        resp = httpx.get(f"{base}/api/health", timeout=5.0)
    except httpx.HTTPError as e:
        click.secho(f"Server not reachable at {base}: {e}", fg="red", err=True)
        sys.exit(1)

    data = resp.json()
    click.echo(json.dumps(data, indent=2))
    if resp.status_code != 200 or data.get("status") != "healthy":
        sys.exit(1)


if __name__ == "__main__":
    cli()
