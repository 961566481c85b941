"""Fixture session: clear-then-insert and raw-script loads in one transaction.

Manifesto:
    A test that starts from a fixture must see either the whole fixture or
    the database exactly as it was.  Half-applied fixtures produce failures
    that point at the wrong test.

    - **One transaction per load:** begin, run every statement, commit
    - **Stop on first error:** roll back, then raise with the cause chained
    - **Validate before opening:** malformed documents never touch the DB
    - **Driver-agnostic:** all SQL text comes from the session's Driver

Architecture::

    load(path) ──► .yml/.yaml ──► load_yaml ──► parse ──► load_fixture
               └─► .sql ────────► load_script ──────────► execute_script
                                                              │
           ┌──────────────────────────────────────────────────┘
           ▼
    Transaction(conn, driver)
      begin ─► driver.execute(tx, stmt) × N ─► commit
                     │ error
                     ▼
                 rollback ─► ExecutionFailedError(cause=db error)

Examples:
    >>> import sqlite3
    >>> from dbfixture import create_registry, new_session
    >>> conn = sqlite3.connect(":memory:")
    >>> session = new_session(conn, "sqlite", registry=create_registry())
    >>> session.execute_script("create table person (id text, name text);")
    1

Guardrails:
    ❌ DON'T: Share one Transaction between loads
    ✅ DO: Let every load* call open and finish its own

    ❌ DON'T: Catch ExecutionFailedError to continue with the next statement
    ✅ DO: Fix the fixture; the load is all-or-nothing

Tags:
    fixture, session, transaction, rollback, loader, dbfixture

Doc-Types:
    - API Reference
    - Usage Guide
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from dbfixture.document import (
    SQL_EXTENSIONS,
    YAML_EXTENSIONS,
    TableFixture,
    decode,
    parse_table_fixture,
    read_file,
)
from dbfixture.drivers.base import Driver
from dbfixture.drivers.registry import DriverRegistry
from dbfixture.errors import (
    ErrorContext,
    ExecutionFailedError,
    FixtureError,
    UnknownFileExtensionError,
)
from dbfixture.logging import LogContext, get_logger
from dbfixture.statements import (
    build_clear_statement,
    build_insert_statements,
    split_script,
)
from dbfixture.transaction import Transaction

logger = get_logger(__name__)


class FixtureSession:
    """Loads fixtures through one connection with one driver.

    Parameters
    ----------
    connection
        DB-API 2.0 connection with autocommit off.
    driver
        Driver for the connection's dialect.
    encoding
        Text encoding of fixture files.
    """

    def __init__(self, connection: Any, driver: Driver, *, encoding: str = "utf-8") -> None:
        self._connection = connection
        self._driver = driver
        self._encoding = encoding

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def driver(self) -> Driver:
        return self._driver

    # ------------------------------------------------------------------
    # File-based API
    # ------------------------------------------------------------------

    def load(self, path: Path | str) -> int:
        """Load a fixture file, choosing the format by extension.

        ``.yml`` / ``.yaml`` files are table fixtures, ``.sql`` files are
        raw scripts.  Returns the number of statements executed.

        Raises:
            UnknownFileExtensionError: For any other extension.
        """
        extension = Path(path).suffix.lower()
        if extension in YAML_EXTENSIONS:
            return self.load_yaml(path)
        if extension in SQL_EXTENSIONS:
            return self.load_script(path)
        raise UnknownFileExtensionError(str(path), extension)

    def load_yaml(self, path: Path | str) -> int:
        """Replace a table's contents with the rows of a YAML fixture.

        Raises:
            FileReadFailedError: If the file cannot be read.
            InvalidFixtureError: If the document is malformed (nothing is executed).
            ExecutionFailedError: If any statement fails (everything is rolled back).
        """
        with LogContext(path=str(path), dialect=self._driver.name):
            data = read_file(path)
            fixture = parse_table_fixture(data, path=path, encoding=self._encoding)
            return self.load_fixture(fixture, path=path)

    def load_script(self, path: Path | str) -> int:
        """Run every statement of a SQL script file in one transaction.

        Raises:
            FileReadFailedError: If the file cannot be read.
            ExecutionFailedError: If any statement fails (everything is rolled back).
        """
        with LogContext(path=str(path), dialect=self._driver.name):
            data = read_file(path)
            text = decode(data, path=path, encoding=self._encoding)
            return self.execute_script(text, path=path)

    def load_all(self, paths: Iterable[Path | str]) -> int:
        """Load several fixture files in order, each in its own transaction.

        Stops at the first failing file; files loaded before it stay
        committed.  Returns the total number of statements executed.
        """
        total = 0
        for path in paths:
            total += self.load(path)
        return total

    # ------------------------------------------------------------------
    # In-memory API
    # ------------------------------------------------------------------

    def load_fixture(self, fixture: TableFixture, *, path: Path | str | None = None) -> int:
        """Clear ``fixture.table`` and insert its rows in one transaction."""
        inserts = build_insert_statements(fixture, self._driver)
        statements = [build_clear_statement(fixture.table, self._driver), *inserts]
        executed = self._apply(statements, path=path, table=fixture.table)
        logger.info(
            "fixture.loaded",
            table=fixture.table,
            rows=len(fixture.rows),
            dialect=self._driver.name,
        )
        return executed

    def execute_script(self, sql: str, *, path: Path | str | None = None) -> int:
        """Split ``sql`` into statements and run them in one transaction."""
        statements = split_script(sql, self._driver)
        executed = self._apply(statements, path=path)
        logger.info("script.loaded", statements=executed, dialect=self._driver.name)
        return executed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply(
        self,
        statements: Sequence[str],
        *,
        path: Path | str | None = None,
        table: str | None = None,
    ) -> int:
        """Execute ``statements`` in order inside a single transaction."""
        context = ErrorContext(
            path=str(path) if path is not None else None,
            table=table,
            dialect=self._driver.name,
        )
        tx = Transaction(self._connection, self._driver)
        try:
            with tx:
                for index, statement in enumerate(statements):
                    self._execute(tx, index, statement, context)
        except FixtureError:
            raise
        except Exception as exc:
            # begin / commit / rollback failures
            raise ExecutionFailedError(
                f"Transaction failed ({tx.state.value}): {exc}",
                context=context,
                cause=exc,
            ) from exc
        return len(statements)

    def _execute(
        self,
        tx: Transaction,
        index: int,
        statement: str,
        context: ErrorContext,
    ) -> None:
        try:
            self._driver.execute(tx, statement)
        except Exception as exc:
            raise ExecutionFailedError(
                f"Statement #{index + 1} failed: {exc}",
                context=ErrorContext(
                    path=context.path,
                    table=context.table,
                    dialect=context.dialect,
                    statement=statement,
                    statement_index=index,
                ),
                cause=exc,
            ) from exc
        logger.debug("statement.executed", index=index, statement=statement)

    def __repr__(self) -> str:
        return f"FixtureSession(driver={self._driver!r})"


def new_session(
    connection: Any,
    dialect: str,
    *,
    registry: DriverRegistry,
    encoding: str = "utf-8",
) -> FixtureSession:
    """Create a ``FixtureSession`` for ``dialect``.

    Raises:
        UnknownDriverError: If ``dialect`` is not registered; no session is created.
    """
    driver = registry.lookup(dialect)
    return FixtureSession(connection, driver, encoding=encoding)


__all__ = [
    "FixtureSession",
    "new_session",
]
