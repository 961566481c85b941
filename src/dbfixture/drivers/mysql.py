"""MySQL driver.

Quotes identifiers with backticks, strips ``--``, ``#`` and ``/* */``
comments, and executes through a prepared cursor.  Some statement classes
cannot go through MySQL's prepared-statement protocol (server error 1295,
``ER_UNSUPPORTED_PS``); those are re-run as plain statements.

The prepared path relies on ``cursor(prepared=True)`` from
mysql-connector-python.  Register ``MySQLDriver(prepared=False)`` for
DB-API modules without prepared cursors (PyMySQL, mysqlclient).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dbfixture.drivers.base import quote
from dbfixture.drivers.comments import trim_comment
from dbfixture.logging import get_logger

if TYPE_CHECKING:
    from dbfixture.drivers.registry import DriverRegistry
    from dbfixture.transaction import Transaction

logger = get_logger(__name__)

# ER_UNSUPPORTED_PS: "This command is not supported in the prepared statement protocol yet"
UNSUPPORTED_PREPARE_ERRNO = 1295


def is_unsupported_prepare(exc: BaseException) -> bool:
    """True if ``exc`` is MySQL's "unsupported in prepared statement protocol" error.

    mysql-connector exposes ``errno``; PyMySQL and mysqlclient put the code
    in ``args[0]``; some wrappers only keep the ``"1295 (HY000): ..."`` or
    ``"Error 1295: ..."`` message.
    """
    if getattr(exc, "errno", None) == UNSUPPORTED_PREPARE_ERRNO:
        return True
    if exc.args and exc.args[0] == UNSUPPORTED_PREPARE_ERRNO:
        return True
    message = str(exc)
    return message.startswith(f"{UNSUPPORTED_PREPARE_ERRNO} ") or message.startswith(
        f"Error {UNSUPPORTED_PREPARE_ERRNO}:"
    )


class MySQLDriver:
    """MySQL / MariaDB driver."""

    line_comment_prefixes = ("--", "#")

    def __init__(self, *, prepared: bool = True) -> None:
        self._prepared = prepared

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def prepared(self) -> bool:
        return self._prepared

    def escape_keyword(self, keyword: str) -> str:
        return quote(keyword, "`")

    def escape_value(self, value: str) -> str:
        return quote(value, "'")

    def trim_comment(self, sql: str) -> str:
        return trim_comment(sql, self.line_comment_prefixes)

    def begin(self, tx: Transaction) -> None:  # noqa: ARG002
        # autocommit is off by default; the first statement opens the transaction
        return None

    def execute(self, tx: Transaction, statement: str) -> None:
        if not self._prepared:
            tx.execute(statement)
            return
        try:
            tx.execute(statement, prepared=True)
        except Exception as exc:
            if not is_unsupported_prepare(exc):
                raise
            logger.debug("mysql.prepare_unsupported", statement=statement)
            tx.execute(statement)

    def __repr__(self) -> str:
        return f"MySQLDriver(prepared={self._prepared})"


def register(registry: DriverRegistry) -> None:
    """Register the MySQL driver under ``mysql``."""
    registry.register("mysql", MySQLDriver())
