"""Error taxonomy and stable error codes for the mock server.

Startup failures (``ConfigurationError``) are fatal. Per-request failures
(``FixtureError`` subclasses) are turned into a JSON error envelope by the
server layer and never stop the process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class MockServerError(Exception):
    """Base class for errors raised by fixture_mock."""


class ConfigurationError(MockServerError):
    """The server cannot start with the given configuration."""


class FixtureError(MockServerError):
    """A fixture could not be turned into a response."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.reason = message


class FixtureReadError(FixtureError):
    """The fixture file could not be read."""


class FixtureParseError(FixtureError):
    """The fixture file is not a valid fixture document."""


@dataclass(frozen=True, slots=True)
class ErrorCode:
    """Represents a stable error code used in the ``error.code`` field."""

    code: str
    default_message: str

    def as_error(self, *, message: str | None = None, details: Any | None = None) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": message if message is not None else self.default_message,
            "details": details,
        }


FIXTURE_READ_FAILED = ErrorCode(
    code="FIXTURE_READ_FAILED",
    default_message="Fixture file could not be read.",
)

FIXTURE_PARSE_FAILED = ErrorCode(
    code="FIXTURE_PARSE_FAILED",
    default_message="Fixture file is not a valid JSON fixture.",
)

UNEXPECTED_ERROR = ErrorCode(
    code="UNEXPECTED_ERROR",
    default_message="Unexpected error in mock server.",
)


def error_from_exception(exc: Exception) -> dict[str, Any]:
    """Convert an exception into the ``{"error": {...}}`` envelope."""

    if isinstance(exc, FixtureReadError):
        error = FIXTURE_READ_FAILED.as_error(details={"fixture": exc.path, "reason": exc.reason})
    elif isinstance(exc, FixtureParseError):
        error = FIXTURE_PARSE_FAILED.as_error(details={"fixture": exc.path, "reason": exc.reason})
    else:
        error = UNEXPECTED_ERROR.as_error(details={"type": type(exc).__name__, "message": str(exc)})
    return {"error": error}
