"""
Error types raised by casedata.

Every error carries an ErrorCode so callers (and test reports) can tell a
programming error (bad selector) apart from a data error (missing or
mistyped fixture value).
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    ILLEGAL_ARGUMENT = "illegal_argument"
    UNSUPPORTED_NAMESPACE = "unsupported_namespace"
    NOT_FOUND = "not_found"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_FIXTURE_FILE = "invalid_fixture_file"


class CaseDataError(Exception):
    """Base class for all casedata errors."""

    code: ErrorCode = ErrorCode.ILLEGAL_ARGUMENT

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class IllegalArgumentError(CaseDataError, ValueError):
    """Raised when a required selector (namespace or target type) is missing."""

    code = ErrorCode.ILLEGAL_ARGUMENT


class UnsupportedNamespaceError(CaseDataError, ValueError):
    """Raised when a namespace outside Namespace reaches the router."""

    code = ErrorCode.UNSUPPORTED_NAMESPACE

    def __init__(self, namespace: Any) -> None:
        self.namespace = namespace
        super().__init__(f"Unsupported fixture namespace: {namespace!r}")


class FixtureNotFoundError(CaseDataError, KeyError):
    """Raised when a named fixture value or test case does not exist."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, name: str, namespace: str | None = None) -> None:
        self.name = name
        self.namespace = namespace
        where = f" in namespace '{namespace}'" if namespace else ""
        super().__init__(f"Fixture '{name}' not found{where}")


class FixtureTypeMismatchError(CaseDataError, TypeError):
    """Raised when a stored value cannot be cast to the requested type."""

    code = ErrorCode.TYPE_MISMATCH

    def __init__(self, name: str, target_type: Any, reason: str = "") -> None:
        self.name = name
        self.target_type = target_type
        type_name = getattr(target_type, "__name__", repr(target_type))
        msg = f"Fixture value '{name}' cannot be cast to {type_name}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class FixtureFileError(CaseDataError, ValueError):
    """Raised when a fixture file cannot be parsed into test cases."""

    code = ErrorCode.INVALID_FIXTURE_FILE

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Invalid fixture file {source}: {reason}")
