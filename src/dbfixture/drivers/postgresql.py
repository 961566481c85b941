"""PostgreSQL driver: ``"ident"`` quoting, ``--`` and ``/* */`` comments.

Compatible with psycopg2 / psycopg, which open a transaction implicitly
on the first statement when autocommit is off.  String literals assume
``standard_conforming_strings = on`` (the default since 9.1).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dbfixture.drivers.base import quote
from dbfixture.drivers.comments import trim_comment

if TYPE_CHECKING:
    from dbfixture.drivers.registry import DriverRegistry
    from dbfixture.transaction import Transaction


class PostgreSQLDriver:
    """PostgreSQL driver."""

    line_comment_prefixes = ("--",)

    @property
    def name(self) -> str:
        return "postgresql"

    def escape_keyword(self, keyword: str) -> str:
        return quote(keyword, '"')

    def escape_value(self, value: str) -> str:
        return quote(value, "'")

    def trim_comment(self, sql: str) -> str:
        return trim_comment(sql, self.line_comment_prefixes)

    def begin(self, tx: Transaction) -> None:  # noqa: ARG002
        return None

    def execute(self, tx: Transaction, statement: str) -> None:
        tx.execute(statement)

    def __repr__(self) -> str:
        return "PostgreSQLDriver()"


def register(registry: DriverRegistry) -> None:
    """Register the PostgreSQL driver under ``postgresql`` and ``postgres``."""
    driver = PostgreSQLDriver()
    registry.register("postgresql", driver)
    registry.register("postgres", driver)  # alias
