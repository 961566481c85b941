"""
Shared pytest fixtures and configuration for dbfixture tests.

This module provides:
- Isolated driver registries
- File-backed SQLite databases with the ``person`` / ``book`` test schema
- A helper for writing fixture files into a temporary directory

Usage:
    Fixtures are auto-discovered by pytest; request them as arguments.

    def test_load(session, write_fixture):
        path = write_fixture("person.yml", "table: person\\n...")
        session.load(path)
"""

import sqlite3
import sys
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

# Ensure dbfixture package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dbfixture import DriverRegistry, FixtureSession, create_registry, new_session


SCHEMA = """
create table person (
    id integer primary key,
    first_name text not null,
    last_name text not null
);
create table book (
    id integer primary key,
    name text not null,
    content text not null
);
"""


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Drop any logging configuration a test (or the CLI) installed."""
    yield
    structlog.reset_defaults()


# =============================================================================
# Registry & Database Fixtures
# =============================================================================


@pytest.fixture
def registry() -> DriverRegistry:
    """Fresh registry with the built-in dialects."""
    return create_registry()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """SQLite database file with the test schema applied."""
    path = tmp_path / "fixture.db"
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def conn(db_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """Connection to the test database."""
    c = sqlite3.connect(db_path)
    yield c
    c.close()


@pytest.fixture
def observer(db_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """Second connection, for checking what other clients can see."""
    c = sqlite3.connect(db_path)
    yield c
    c.close()


@pytest.fixture
def session(conn: sqlite3.Connection, registry: DriverRegistry) -> FixtureSession:
    """SQLite fixture session on the test database."""
    return new_session(conn, "sqlite", registry=registry)


# =============================================================================
# File Helpers
# =============================================================================


@pytest.fixture
def write_fixture(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a dedented fixture file under ``tmp_path/fixtures`` and return its path."""
    directory = tmp_path / "fixtures"
    directory.mkdir(exist_ok=True)

    def _write(name: str, content: str) -> Path:
        path = directory / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fetch_rows() -> Callable[[sqlite3.Connection, str], list[tuple]]:
    """Return a helper reading all rows of a table ordered by primary key."""

    def _fetch(connection: sqlite3.Connection, table: str) -> list[tuple]:
        return connection.execute(f"select * from {table} order by id").fetchall()

    return _fetch
