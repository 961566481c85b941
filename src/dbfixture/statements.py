"""Statement builder: fixture documents and scripts to ordered SQL statements.

Two independent paths:

- ``build_insert_statements``: one ``insert into`` per row of a
  ``TableFixture``, columns in the row's own order.
- ``split_script``: comment-free statements of a raw SQL script, split on
  ``;`` in the order they appear.

Neither path touches the database; quoting and comment syntax come from
the ``Driver``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dbfixture.document import TableFixture
    from dbfixture.drivers.base import Driver

STATEMENT_TERMINATOR = ";"


def build_clear_statement(table: str, driver: Driver) -> str:
    """``delete from <table>`` for clear-then-insert loads."""
    return f"delete from {driver.escape_keyword(table)}"


def build_insert_statement(table: str, row: Mapping[str, str], driver: Driver) -> str:
    """Build one ``insert into`` statement for ``row``.

    Columns follow the mapping's iteration order; values are emitted in the
    same pass so the two lists stay aligned.

    >>> from dbfixture.drivers.mysql import MySQLDriver
    >>> build_insert_statement("person", {"id": "1", "name": "foo"}, MySQLDriver())
    "insert into `person` (`id`, `name`) values ('1', 'foo')"
    """
    columns = []
    values = []
    for column, value in row.items():
        columns.append(driver.escape_keyword(column))
        values.append(driver.escape_value(value))
    return "insert into {} ({}) values ({})".format(
        driver.escape_keyword(table),
        ", ".join(columns),
        ", ".join(values),
    )


def build_insert_statements(fixture: TableFixture, driver: Driver) -> list[str]:
    """One insert statement per row, in document order.

    Raises:
        InvalidFixtureError: If the fixture has no table name or no rows.
    """
    fixture.validate()
    return [build_insert_statement(fixture.table, row, driver) for row in fixture.rows]


def split_script(sql: str, driver: Driver) -> list[str]:
    """Split a SQL script into individual statements.

    Surrounding newlines are trimmed, comments removed with
    ``driver.trim_comment``, then the text is split on ``;``.  Fragments
    are stripped of whitespace and empty ones dropped; order and duplicates
    are kept.  A script with only comments yields ``[]``.
    """
    code = driver.trim_comment(sql.strip("\n"))
    statements = []
    for fragment in code.split(STATEMENT_TERMINATOR):
        statement = fragment.strip()
        if statement:
            statements.append(statement)
    return statements


__all__ = [
    "STATEMENT_TERMINATOR",
    "build_clear_statement",
    "build_insert_statement",
    "build_insert_statements",
    "split_script",
]
