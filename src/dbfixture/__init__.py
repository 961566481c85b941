"""dbfixture -- load YAML and SQL test fixtures into relational databases.

Each load clears the target table and inserts the fixture rows (or runs a
raw SQL script) inside a single transaction, rolling back on the first
error.  Dialect differences live in pluggable drivers.

Architecture::

    errors.py          FixtureError hierarchy
    logging.py         structlog configuration
    settings.py        FixtureSettings (pydantic-settings)
    drivers/           Driver protocol, comment stripping, MySQL/PostgreSQL/SQLite
    document.py        File read + YAML table fixtures
    statements.py      Insert builder + script splitter
    transaction.py     Single-use transaction handle
    session.py         FixtureSession / new_session
    cli/               Typer command line

Example::

    import sqlite3
    from dbfixture import create_registry, new_session

    registry = create_registry()
    session = new_session(sqlite3.connect("test.db"), "sqlite", registry=registry)
    session.load("fixtures/person.yml")
"""

from dbfixture.document import TableFixture, parse_table_fixture, read_file
from dbfixture.drivers import (
    Driver,
    DriverRegistry,
    MySQLDriver,
    PostgreSQLDriver,
    SQLiteDriver,
    create_registry,
)
from dbfixture.errors import (
    DuplicateDriverError,
    ErrorCategory,
    ErrorContext,
    ExecutionFailedError,
    FileReadFailedError,
    FixtureError,
    InvalidFixtureError,
    UnknownDriverError,
    UnknownFileExtensionError,
)
from dbfixture.session import FixtureSession, new_session
from dbfixture.statements import (
    build_clear_statement,
    build_insert_statement,
    build_insert_statements,
    split_script,
)
from dbfixture.transaction import Transaction, TransactionState

__version__ = "0.1.0"

__all__ = [
    # Session
    "FixtureSession",
    "new_session",
    "Transaction",
    "TransactionState",
    # Drivers
    "Driver",
    "DriverRegistry",
    "create_registry",
    "MySQLDriver",
    "PostgreSQLDriver",
    "SQLiteDriver",
    # Documents & statements
    "TableFixture",
    "parse_table_fixture",
    "read_file",
    "build_clear_statement",
    "build_insert_statement",
    "build_insert_statements",
    "split_script",
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "FixtureError",
    "FileReadFailedError",
    "InvalidFixtureError",
    "UnknownFileExtensionError",
    "UnknownDriverError",
    "DuplicateDriverError",
    "ExecutionFailedError",
]
