"""Fixture documents: reading files and parsing declarative YAML fixtures.

File Format (YAML):
    table: person
    record:
      - id: 1
        first_name: foo
        last_name: bar
      - id: 2
        first_name: piyo
        last_name: fuga

Unknown top-level keys are ignored.  Scalars are kept exactly as written
(``007`` stays ``007``, ``no`` stays ``no``); only null (``~``, ``null`` or
an empty value) is resolved, and becomes the empty string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from dbfixture.errors import FileReadFailedError, InvalidFixtureError
from dbfixture.logging import get_logger

logger = get_logger(__name__)

YAML_EXTENSIONS = frozenset({".yml", ".yaml"})
SQL_EXTENSIONS = frozenset({".sql"})


class TextLoader(yaml.SafeLoader):
    """SafeLoader that resolves no implicit types except null."""

    yaml_implicit_resolvers: dict = {}


TextLoader.add_implicit_resolver(
    "tag:yaml.org,2002:null",
    re.compile(r"^(?:~|null|Null|NULL|)$"),
    ["~", "n", "N", ""],
)


@dataclass(frozen=True)
class TableFixture:
    """Rows to load into one table, in document order."""

    table: str
    rows: tuple[dict[str, str], ...]

    def validate(self) -> None:
        """Raise ``InvalidFixtureError`` unless table and rows are non-empty."""
        if not self.table:
            raise InvalidFixtureError("Invalid fixture: missing table name")
        if not self.rows:
            raise InvalidFixtureError(
                f"Invalid fixture: no records for table {self.table!r}"
            ).with_context(table=self.table)


def read_file(path: Path | str) -> bytes:
    """Read a fixture file.

    Raises:
        FileReadFailedError: If the file does not exist or cannot be read.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise FileReadFailedError(str(path), cause=exc) from exc
    logger.debug("fixture.read", path=str(path), size=len(data))
    return data


def decode(data: bytes, *, path: Path | str | None = None, encoding: str = "utf-8") -> str:
    """Decode file content, reporting undecodable bytes as an invalid fixture."""
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        error = InvalidFixtureError(f"Fixture is not valid {encoding}: {exc}", cause=exc)
        if path is not None:
            error.with_context(path=str(path))
        raise error from exc


def parse_table_fixture(
    data: bytes | str,
    *,
    path: Path | str | None = None,
    encoding: str = "utf-8",
) -> TableFixture:
    """Parse a YAML table fixture into a validated ``TableFixture``.

    Raises:
        InvalidFixtureError: If the YAML cannot be parsed, ``table`` is
            missing or ``record`` is missing, empty or malformed.
    """
    text = decode(data, path=path, encoding=encoding) if isinstance(data, bytes) else data
    where = f" in {path}" if path is not None else ""

    try:
        document = yaml.load(text, Loader=TextLoader)
    except yaml.YAMLError as exc:
        raise _invalid(f"Invalid YAML{where}: {exc}", path, cause=exc) from exc

    if not isinstance(document, dict):
        kind = type(document).__name__
        raise _invalid(f"Invalid fixture{where}: expected a mapping, got {kind}", path)

    table = document.get("table")
    if table is None or isinstance(table, (dict, list)) or not str(table).strip():
        raise _invalid(f"Invalid fixture{where}: missing 'table'", path)
    table = str(table).strip()

    records = document.get("record")
    if records is None:
        records = []
    if not isinstance(records, list):
        raise _invalid(
            f"Invalid fixture{where}: 'record' must be a list of mappings", path, table=table
        )

    rows = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise _invalid(
                f"Invalid fixture{where}: record #{index} is not a mapping", path, table=table
            )
        rows.append({str(column): _to_text(value, path, table) for column, value in record.items()})

    fixture = TableFixture(table=table, rows=tuple(rows))
    try:
        fixture.validate()
    except InvalidFixtureError as exc:
        if path is not None:
            exc.with_context(path=str(path))
        raise
    return fixture


def _to_text(value: Any, path: Path | str | None, table: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise _invalid(f"Invalid fixture: nested value {value!r} is not a scalar", path, table=table)
    return str(value)


def _invalid(
    message: str,
    path: Path | str | None,
    *,
    table: str | None = None,
    cause: BaseException | None = None,
) -> InvalidFixtureError:
    error = InvalidFixtureError(message, cause=cause)
    if path is not None:
        error.with_context(path=str(path))
    if table is not None:
        error.with_context(table=table)
    return error


__all__ = [
    "TableFixture",
    "read_file",
    "decode",
    "parse_table_fixture",
    "YAML_EXTENSIONS",
    "SQL_EXTENSIONS",
]
