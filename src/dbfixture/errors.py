"""
Structured error types for dbfixture.

Every failure raised by the loader is a ``FixtureError`` carrying a
category, a structured context (path, table, dialect, statement) and the
chained underlying exception.  Callers get one error per call and can
classify it by type without parsing messages.

Manifesto:
    - **Typed hierarchy:** One class per failure mode of a load
    - **Pass-through causes:** Database errors are chained, never normalized
    - **Rich context:** Errors know which file, table and statement failed
    - **Serializable:** ``to_dict()`` feeds structured logs

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                       FixtureError                           │
        │              (category, context, cause)                      │
        ├─────────────────────────────────────────────────────────────┤
        │  FileReadFailedError        (STORAGE)                        │
        │  InvalidFixtureError        (VALIDATION)                     │
        │  UnknownFileExtensionError  (VALIDATION)                     │
        │  UnknownDriverError         (CONFIG)                         │
        │  DuplicateDriverError       (CONFIG)                         │
        │  ExecutionFailedError       (DATABASE)                       │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> try:
    ...     raise OSError("No such file")
    ... except OSError as e:
    ...     error = FileReadFailedError("testdata/none.yml", cause=e)
    >>> error.category
    <ErrorCategory.STORAGE: 'STORAGE'>
    >>> error.context.path
    'testdata/none.yml'

Guardrails:
    ❌ DON'T: Wrap a database error in a new message and drop the original
    ✅ DO: Pass it as ``cause=`` so callers can inspect dialect diagnostics

    ❌ DON'T: Raise plain ValueError for a malformed fixture
    ✅ DO: Raise InvalidFixtureError with the offending path in context

Tags:
    error-handling, exception-hierarchy, error-context, dbfixture

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification."""

    STORAGE = "STORAGE"           # File system reads
    VALIDATION = "VALIDATION"     # Malformed fixture documents
    CONFIG = "CONFIG"             # Driver registration and lookup
    DATABASE = "DATABASE"         # Statement execution, commit, rollback
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to a ``FixtureError``.

    Only the fields relevant to a failure are set; ``to_dict()`` drops the
    rest so log lines stay compact.
    """

    path: str | None = None
    table: str | None = None
    dialect: str | None = None
    statement: str | None = None
    statement_index: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["path", "table", "dialect", "statement", "statement_index"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FixtureError(Exception):
    """
    Base exception for all dbfixture errors.

    Subclasses set ``default_category``; the constructor accepts an explicit
    ``category`` for the rare case that needs to override it.

    Examples:
        >>> error = FixtureError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(table="person").context.table
        'person'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FixtureError:
        """
        Add context to this error (fluent API).

        Usage:
            raise InvalidFixtureError("Missing table").with_context(
                path="fixtures/person.yml"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# FILE ERRORS
# =============================================================================


class FileReadFailedError(FixtureError):
    """Fixture file could not be read (missing, unreadable)."""

    default_category = ErrorCategory.STORAGE

    def __init__(self, path: str, *, cause: BaseException | None = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Failed to read file {path}{detail}",
            context=ErrorContext(path=path),
            cause=cause,
        )


# =============================================================================
# DOCUMENT ERRORS
# =============================================================================


class InvalidFixtureError(FixtureError):
    """
    Fixture document is structurally invalid.

    Raised for unparsable YAML, a missing ``table`` key or an empty
    ``record`` list.  Never raised after a transaction has been opened.
    """

    default_category = ErrorCategory.VALIDATION


class UnknownFileExtensionError(FixtureError):
    """File extension does not map to a fixture format."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, path: str, extension: str):
        self.extension = extension
        super().__init__(
            f"Unknown fixture file extension {extension!r}: {path}",
            context=ErrorContext(path=path),
        )


# =============================================================================
# DRIVER ERRORS
# =============================================================================


class DuplicateDriverError(FixtureError):
    """Driver name already registered, or the driver is empty."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, name: str, message: str | None = None):
        self.driver_name = name
        super().__init__(
            message or f"Failed to register driver: {name!r} is already registered",
            context=ErrorContext(dialect=name),
        )


class UnknownDriverError(FixtureError):
    """No driver registered under the requested dialect name."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, name: str, available: list[str] | None = None):
        self.driver_name = name
        known = ", ".join(available) if available else "none"
        super().__init__(
            f"Unknown driver {name!r} (forgotten registration?). Registered: {known}",
            context=ErrorContext(dialect=name),
        )


# =============================================================================
# EXECUTION ERRORS
# =============================================================================


class ExecutionFailedError(FixtureError):
    """
    Database-level failure while clearing, inserting or running a script.

    ``cause`` is the DB-API exception exactly as the database module raised
    it; dialect-specific diagnostics (``errno``, ``pgcode``, ...) live there.
    """

    default_category = ErrorCategory.DATABASE


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FixtureError",
    "FileReadFailedError",
    "InvalidFixtureError",
    "UnknownFileExtensionError",
    "DuplicateDriverError",
    "UnknownDriverError",
    "ExecutionFailedError",
]
