"""Single-use transaction handle over a DB-API 2.0 connection.

A ``Transaction`` covers exactly one fixture load::

    IDLE ──begin()──► OPEN ──commit()───► COMMITTED
                        └───rollback()──► ROLLED_BACK

Used as a context manager it begins on entry, commits on a clean exit and
rolls back when the block raises, so no exit path leaves it open.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from dbfixture.errors import FixtureError
from dbfixture.logging import get_logger

if TYPE_CHECKING:
    from dbfixture.drivers.base import Driver

logger = get_logger(__name__)


class TransactionState(str, Enum):
    """Lifecycle of a ``Transaction``."""

    IDLE = "idle"
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Transaction:
    """Transaction scope handed to ``Driver.execute``.

    Parameters
    ----------
    connection
        DB-API 2.0 connection (``sqlite3``, ``psycopg2``,
        ``mysql.connector``, ...) with autocommit off.
    driver
        Driver whose ``begin`` hook opens the transaction.
    """

    def __init__(self, connection: Any, driver: Driver) -> None:
        self._connection = connection
        self._driver = driver
        self._state = TransactionState.IDLE
        self.statements_executed = 0

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def state(self) -> TransactionState:
        return self._state

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def begin(self) -> None:
        self._require(TransactionState.IDLE, "begin")
        # Statements issued by the driver's begin hook need an OPEN state
        self._state = TransactionState.OPEN
        try:
            self._driver.begin(self)
        except Exception:
            self._state = TransactionState.IDLE
            raise
        # BEGIN issued by the hook is not a fixture statement
        self.statements_executed = 0
        logger.debug("transaction.opened", dialect=self._driver.name)

    def commit(self) -> None:
        self._require(TransactionState.OPEN, "commit")
        self._connection.commit()
        self._state = TransactionState.COMMITTED
        logger.debug(
            "transaction.committed",
            dialect=self._driver.name,
            statements=self.statements_executed,
        )

    def rollback(self) -> None:
        self._require(TransactionState.OPEN, "rollback")
        self._connection.rollback()
        self._state = TransactionState.ROLLED_BACK
        logger.info(
            "transaction.rolled_back",
            dialect=self._driver.name,
            statements=self.statements_executed,
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def cursor(self, **options: Any) -> Any:
        """Open a cursor on the connection; ``options`` go to ``connection.cursor``."""
        self._require(TransactionState.OPEN, "cursor")
        return self._connection.cursor(**options)

    def execute(self, statement: str, **cursor_options: Any) -> None:
        """Execute ``statement`` on a fresh cursor and close it."""
        cursor = self.cursor(**cursor_options)
        try:
            cursor.execute(statement)
        finally:
            cursor.close()
        self.statements_executed += 1

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> Transaction:
        self.begin()
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if self._state is not TransactionState.OPEN:
            return
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def _require(self, expected: TransactionState, action: str) -> None:
        if self._state is not expected:
            raise FixtureError(
                f"Cannot {action} a transaction in state {self._state.value!r}"
            )

    def __repr__(self) -> str:
        return f"Transaction(dialect={self._driver.name!r}, state={self._state.value})"


__all__ = [
    "Transaction",
    "TransactionState",
]
