from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional

import typer

from .app.bootstrap import Services, build_services, check_connections
from .app.core.logging import setup_logging
from .app.settings import get_app_settings
from .db.engine import create_schema

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _run(fn: Callable[[Services], Awaitable[Any]]) -> Any:
    async def main() -> Any:
        services = build_services()
        try:
            return await fn(services)
        finally:
            await services.aclose()

    return asyncio.run(main())


def _print_version(value: bool) -> None:
    if value:
        settings = get_app_settings()
        typer.echo(f"{settings.name} {settings.version}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show the version and exit"
    ),
):
    """Operate the record cache against the configured database and Redis."""
    setup_logging(level=log_level)


@app.command("init-db")
def init_db():
    """Create the users table (development only; deployments use migrations)."""
    _run(lambda s: create_schema(s.db))
    typer.echo("Schema created")


@app.command("check")
def check():
    """Ping the database and the cache."""
    status = _run(check_connections)
    for name, ok in status.items():
        typer.echo(f"{name}: {'ok' if ok else 'unreachable'}")
    if not all(status.values()):
        raise typer.Exit(code=1)


@app.command("get")
def get(record_id: int = typer.Argument(..., help="Record id")):
    """Read one record through the cache."""
    record = _run(lambda s: s.records.read_record(record_id))
    if record is None:
        typer.echo(f"Record {record_id} not found", err=True)
        raise typer.Exit(code=1)
    typer.echo(record.model_dump_json())


@app.command("list")
def list_():
    """List every record from the database."""
    records = _run(lambda s: s.records.list_records())
    typer.echo(json.dumps([r.model_dump() for r in records]))


if __name__ == "__main__":
    app()
