"""Tests for insert statement building and script splitting."""

from __future__ import annotations

import pytest

from dbfixture.document import TableFixture
from dbfixture.drivers import MySQLDriver, PostgreSQLDriver, SQLiteDriver
from dbfixture.errors import InvalidFixtureError
from dbfixture.statements import (
    build_clear_statement,
    build_insert_statement,
    build_insert_statements,
    split_script,
)


@pytest.fixture
def mysql() -> MySQLDriver:
    return MySQLDriver()


PERSON = TableFixture(
    table="person",
    rows=(
        {"id": "1", "first_name": "foo", "last_name": "bar"},
        {"id": "2", "first_name": "piyo", "last_name": "fuga"},
    ),
)


# =============================================================================
# Insert statements
# =============================================================================


class TestBuildInsertStatements:
    def test_person_fixture_mysql(self, mysql: MySQLDriver):
        assert build_insert_statements(PERSON, mysql) == [
            "insert into `person` (`id`, `first_name`, `last_name`) values ('1', 'foo', 'bar')",
            "insert into `person` (`id`, `first_name`, `last_name`) values ('2', 'piyo', 'fuga')",
        ]

    def test_person_fixture_postgresql(self):
        statements = build_insert_statements(PERSON, PostgreSQLDriver())
        assert statements[0] == (
            'insert into "person" ("id", "first_name", "last_name") values (\'1\', \'foo\', \'bar\')'
        )

    def test_single_column(self, mysql: MySQLDriver):
        assert build_insert_statement("t", {"a": "x"}, mysql) == "insert into `t` (`a`) values ('x')"

    def test_rows_keep_their_own_columns(self, mysql: MySQLDriver):
        fixture = TableFixture(table="t", rows=({"a": "1"}, {"b": "2", "a": "3"}))
        assert build_insert_statements(fixture, mysql) == [
            "insert into `t` (`a`) values ('1')",
            "insert into `t` (`b`, `a`) values ('2', '3')",
        ]

    def test_columns_and_values_aligned(self, mysql: MySQLDriver):
        row = {"z": "26", "a": "1", "m": "13"}
        assert build_insert_statement("t", row, mysql) == (
            "insert into `t` (`z`, `a`, `m`) values ('26', '1', '13')"
        )

    def test_quotes_are_doubled(self, mysql: MySQLDriver):
        statement = build_insert_statement("t", {"name": "O'Brien"}, mysql)
        assert statement == "insert into `t` (`name`) values ('O''Brien')"

    def test_empty_string_value(self, mysql: MySQLDriver):
        assert build_insert_statement("t", {"a": ""}, mysql) == "insert into `t` (`a`) values ('')"

    def test_duplicate_rows_kept(self, mysql: MySQLDriver):
        fixture = TableFixture(table="t", rows=({"a": "1"}, {"a": "1"}))
        assert len(build_insert_statements(fixture, mysql)) == 2

    @pytest.mark.parametrize(
        "fixture",
        [
            TableFixture(table="", rows=({"a": "1"},)),
            TableFixture(table="t", rows=()),
        ],
    )
    def test_invalid_fixture(self, fixture: TableFixture, mysql: MySQLDriver):
        with pytest.raises(InvalidFixtureError):
            build_insert_statements(fixture, mysql)


class TestBuildClearStatement:
    def test_mysql(self, mysql: MySQLDriver):
        assert build_clear_statement("person", mysql) == "delete from `person`"

    def test_sqlite(self):
        assert build_clear_statement("person", SQLiteDriver()) == 'delete from "person"'


# =============================================================================
# Script splitting
# =============================================================================


class TestSplitScript:
    def test_comments_and_terminators(self, mysql: MySQLDriver):
        assert split_script("-- c\na;\nb;# c\n", mysql) == ["a", "b"]

    def test_block_comments(self, mysql: MySQLDriver):
        sql = "/* comment */c; \nd;/*\ne;\n*/f;-- comment\n"
        assert split_script(sql, mysql) == ["c", "d", "f"]

    @pytest.mark.parametrize(
        "sql",
        ["", "\n\n", "-- only\n", "/* block */", "# hash\n-- dash\n", " ; ;\n;"],
    )
    def test_nothing_to_run(self, sql: str, mysql: MySQLDriver):
        assert split_script(sql, mysql) == []

    def test_missing_final_terminator(self, mysql: MySQLDriver):
        assert split_script("a;\nb", mysql) == ["a", "b"]

    def test_order_and_duplicates(self, mysql: MySQLDriver):
        assert split_script("x;y;x;", mysql) == ["x", "y", "x"]

    def test_comment_placement_does_not_matter(self, mysql: MySQLDriver):
        plain = split_script("insert into t values (1);\ninsert into t values (2);", mysql)
        commented = split_script(
            "-- first\ninsert into t /* inline */values (1);\n"
            "# second\ninsert into t values (2); -- trailing\n",
            mysql,
        )
        assert [" ".join(s.split()) for s in commented] == plain

    def test_multiline_statement(self, mysql: MySQLDriver):
        sql = "create table t (\n  id int, -- key\n  name text\n);\n"
        assert split_script(sql, mysql) == ["create table t (\n  id int, \n  name text\n)"]

    def test_hash_kept_for_sqlite(self):
        assert split_script("select '#';", SQLiteDriver()) == ["select '#'"]
