"""Tests for the FixtureError hierarchy."""

from __future__ import annotations

import pytest

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


class TestErrorContext:
    def test_to_dict_drops_unset_fields(self):
        ctx = ErrorContext(path="a.yml", statement_index=0)
        assert ctx.to_dict() == {"path": "a.yml", "statement_index": 0}

    def test_metadata_merged(self):
        ctx = ErrorContext(table="t", metadata={"attempt": 2})
        assert ctx.to_dict() == {"table": "t", "attempt": 2}


class TestFixtureError:
    def test_defaults(self):
        error = FixtureError("boom")
        assert str(error) == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.cause is None
        assert error.context.to_dict() == {}

    def test_cause_is_chained(self):
        cause = RuntimeError("db down")
        error = ExecutionFailedError("failed", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == "db down"

    def test_with_context(self):
        error = InvalidFixtureError("bad").with_context(path="p.yml", line=3)
        assert error.context.path == "p.yml"
        assert error.context.metadata == {"line": 3}

    def test_to_dict(self):
        error = ExecutionFailedError(
            "Statement #1 failed",
            context=ErrorContext(table="person", statement="delete from person", statement_index=0),
        )
        assert error.to_dict() == {
            "error_type": "ExecutionFailedError",
            "message": "Statement #1 failed",
            "category": "DATABASE",
            "context": {
                "table": "person",
                "statement": "delete from person",
                "statement_index": 0,
            },
        }

    def test_repr(self):
        assert repr(InvalidFixtureError("x")) == "InvalidFixtureError('x', category=VALIDATION)"


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (FileReadFailedError("a.yml"), ErrorCategory.STORAGE),
            (InvalidFixtureError("x"), ErrorCategory.VALIDATION),
            (UnknownFileExtensionError("a.json", ".json"), ErrorCategory.VALIDATION),
            (DuplicateDriverError("mysql"), ErrorCategory.CONFIG),
            (UnknownDriverError("oracle", ["mysql"]), ErrorCategory.CONFIG),
            (ExecutionFailedError("x"), ErrorCategory.DATABASE),
        ],
    )
    def test_categories(self, error: FixtureError, category: ErrorCategory):
        assert isinstance(error, FixtureError)
        assert error.category == category

    def test_file_read_failed_message(self):
        error = FileReadFailedError("testdata/none.yml", cause=FileNotFoundError("missing"))
        assert error.message == "Failed to read file testdata/none.yml: missing"
        assert error.context.path == "testdata/none.yml"

    def test_unknown_extension(self):
        error = UnknownFileExtensionError("seed.csv", ".csv")
        assert error.extension == ".csv"
        assert "'.csv'" in error.message

    def test_unknown_driver_lists_registered(self):
        error = UnknownDriverError("oracle", ["mysql", "sqlite"])
        assert error.message == (
            "Unknown driver 'oracle' (forgotten registration?). Registered: mysql, sqlite"
        )
        assert error.driver_name == "oracle"

    def test_explicit_category_override(self):
        error = ExecutionFailedError("x", category=ErrorCategory.INTERNAL)
        assert error.category == ErrorCategory.INTERNAL
