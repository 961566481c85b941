"""SQLite driver: ``"ident"`` quoting, ``--`` and ``/* */`` comments.

Python's ``sqlite3`` module only opens a transaction implicitly before
DML, so DDL in a fixture script would otherwise be committed as it runs.
``begin`` issues an explicit ``BEGIN`` to keep scripts atomic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dbfixture.drivers.base import quote
from dbfixture.drivers.comments import trim_comment

if TYPE_CHECKING:
    from dbfixture.drivers.registry import DriverRegistry
    from dbfixture.transaction import Transaction


class SQLiteDriver:
    """SQLite driver for ``sqlite3.Connection``."""

    line_comment_prefixes = ("--",)

    @property
    def name(self) -> str:
        return "sqlite"

    def escape_keyword(self, keyword: str) -> str:
        return quote(keyword, '"')

    def escape_value(self, value: str) -> str:
        return quote(value, "'")

    def trim_comment(self, sql: str) -> str:
        return trim_comment(sql, self.line_comment_prefixes)

    def begin(self, tx: Transaction) -> None:
        if not getattr(tx.connection, "in_transaction", False):
            tx.execute("BEGIN")

    def execute(self, tx: Transaction, statement: str) -> None:
        tx.execute(statement)

    def __repr__(self) -> str:
        return "SQLiteDriver()"


def register(registry: DriverRegistry) -> None:
    """Register the SQLite driver under ``sqlite``."""
    registry.register("sqlite", SQLiteDriver())
