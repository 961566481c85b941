"""
Root Typer application for the dbfixture CLI.

Only SQLite connections are opened from the command line; other dialects
are used through the library API with a connection the caller creates.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typer import Typer

from dbfixture.drivers import create_registry
from dbfixture.errors import FixtureError
from dbfixture.logging import configure_logging
from dbfixture.session import new_session
from dbfixture.settings import FixtureSettings
from dbfixture.statements import split_script

app = Typer(
    name="dbfixture",
    help="dbfixture — load YAML and SQL test fixtures into a database.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from dbfixture import __version__

        typer.echo(f"dbfixture {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Override DBFIXTURE_LOG_LEVEL."),
) -> None:
    """dbfixture CLI — load fixtures, preview scripts, list dialects."""
    overrides = {"log_level": log_level} if log_level else {}
    try:
        settings = FixtureSettings(**overrides)
    except ValidationError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level / DBFIXTURE_*") from e
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


def _fail(error: FixtureError) -> NoReturn:
    err_console.print(f"[bold red]Error[/bold red] ({error.__class__.__name__}): {escape(error.message)}")
    raise typer.Exit(code=1)


# ── Commands ─────────────────────────────────────────────────────────────


@app.command()
def load(
    paths: list[Path] = typer.Argument(..., help="Fixture files (.yml, .yaml, .sql)"),
    database: Path | None = typer.Option(None, "--database", "-d", help="SQLite database path"),
) -> None:
    """Load fixture files into a SQLite database, one transaction per file."""
    settings = FixtureSettings()
    db_path = database or settings.database
    registry = create_registry()

    conn = sqlite3.connect(str(db_path))
    try:
        session = new_session(conn, "sqlite", registry=registry, encoding=settings.encoding)
        for path in paths:
            try:
                count = session.load(path)
            except FixtureError as e:
                _fail(e)
            console.print(f"[green]✓[/green] {escape(str(path))} [dim]({count} statements)[/dim]")
    finally:
        conn.close()


@app.command()
def split(
    path: Path = typer.Argument(..., help="SQL script"),
    dialect: str | None = typer.Option(None, "--dialect", help="Registered dialect name"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Show the statements a SQL script would run, without executing them."""
    from dbfixture.document import decode, read_file

    settings = FixtureSettings()
    registry = create_registry()
    try:
        driver = registry.lookup(dialect or settings.dialect)
        text = decode(read_file(path), path=path, encoding=settings.encoding)
    except FixtureError as e:
        _fail(e)

    statements = split_script(text, driver)
    if json_out:
        console.print_json(json.dumps(statements))
        return
    if not statements:
        console.print("[dim]No statements.[/dim]")
        return
    for index, statement in enumerate(statements, start=1):
        console.print(f"[cyan]{index:>3}[/cyan]  {escape(statement)}", highlight=False)


@app.command()
def dialects() -> None:
    """List registered dialects."""
    registry = create_registry()
    table = Table(title="Dialects", show_lines=False, pad_edge=False)
    table.add_column("name")
    table.add_column("driver", overflow="fold")
    for name in registry.names():
        table.add_row(name, repr(registry.lookup(name)))
    console.print(table)


if __name__ == "__main__":
    app()
