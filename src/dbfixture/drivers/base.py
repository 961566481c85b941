"""Driver protocol: the per-dialect strategy behind every fixture load.

A ``Driver`` knows how one database engine quotes identifiers and string
literals, which comment syntax its scripts use, and how to run a single
statement inside an open transaction.  The loader itself never contains
dialect-specific SQL; it asks the driver.

Manifesto:
    The same fixture file must load into MySQL, PostgreSQL and SQLite.
    Without a driver layer, quoting rules and driver quirks leak into the
    statement builder and every new engine means editing the core.

    - **One interface:** Driver protocol for quoting, comments, execution
    - **Stateless:** One shared instance per dialect, safe across sessions
    - **Explicit registration:** Dialect modules expose ``register(registry)``
    - **Quirks stay local:** e.g. MySQL's unsupported-prepare fallback

Architecture::

    ┌──────────────────────────────────────────────────────────────────┐
    │                        FixtureSession                            │
    │   build statements ──► Transaction ──► driver.execute(tx, sql)   │
    └──────────────────────────────────────────────────────────────────┘
                                  │
                                  ▼
        ┌──────────────┐   ┌──────────────┐   ┌──────────────┐
        │ MySQL        │   │ PostgreSQL   │   │ SQLite       │
        │ `ident`      │   │ "ident"      │   │ "ident"      │
        │ -- # /* */   │   │ -- /* */     │   │ -- /* */     │
        │ prepare+1295 │   │ implicit tx  │   │ BEGIN        │
        └──────────────┘   └──────────────┘   └──────────────┘

Examples:
    >>> from dbfixture.drivers.mysql import MySQLDriver
    >>> d = MySQLDriver()
    >>> d.escape_keyword("person")
    '`person`'
    >>> d.escape_value("foo")
    "'foo'"
    >>> d.trim_comment("a; -- note")
    'a; '

Guardrails:
    ❌ DON'T: Hard-code backticks or quote characters in the statement builder
    ✅ DO: Call ``escape_keyword`` / ``escape_value`` on the driver

    ❌ DON'T: Wrap or retry database errors inside ``execute``
    ✅ DO: Let them propagate; the session rolls back and chains them

Tags:
    driver, dialect, sql, escaping, comments, dbfixture

Doc-Types:
    - API Reference
    - Driver Extension Guide
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dbfixture.transaction import Transaction


@runtime_checkable
class Driver(Protocol):
    """Per-dialect strategy contract.

    Implementations must be stateless (or immutable after construction):
    a single instance is registered once and shared by every session.
    """

    @property
    def name(self) -> str:
        """Dialect name (e.g. ``'mysql'``)."""
        ...

    def escape_keyword(self, keyword: str) -> str:
        """Quote a table or column name in the dialect's identifier syntax."""
        ...

    def escape_value(self, value: str) -> str:
        """Render ``value`` as a SQL string literal."""
        ...

    def trim_comment(self, sql: str) -> str:
        """Return ``sql`` with line and block comments removed in place."""
        ...

    def begin(self, tx: Transaction) -> None:
        """Open the transaction on the connection if the DB-API module does not.

        Most DB-API modules start a transaction implicitly on the first
        statement; drivers for those make this a no-op.
        """
        ...

    def execute(self, tx: Transaction, statement: str) -> None:
        """Run one statement inside ``tx``.

        Errors raised by the database module propagate unchanged.
        """
        ...


def quote(text: str, quote_char: str) -> str:
    """Wrap ``text`` in ``quote_char``, doubling embedded occurrences.

    >>> quote("person", "`")
    '`person`'
    >>> quote("O'Brien", "'")
    "'O''Brien'"
    """
    return f"{quote_char}{text.replace(quote_char, quote_char * 2)}{quote_char}"


__all__ = [
    "Driver",
    "quote",
]
