"""Fixture documents and how they become responses.

A fixture is a JSON object. ``status`` (default 200) and ``timeout`` in
milliseconds (default 1) are reserved; every other top-level key is the
response body. Files are read on every request, so body edits show up
without a restart.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiofiles

from .errors import FixtureParseError, FixtureReadError

JsonObject = dict[str, Any]

DEFAULT_STATUS = 200
DEFAULT_TIMEOUT_MS = 1


@dataclass(frozen=True, slots=True)
class FixtureResponse:
    status: int = DEFAULT_STATUS
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    body: JsonObject = field(default_factory=dict)

    @property
    def delay_seconds(self) -> float:
        return self.timeout_ms / 1000


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_fixture(text: str, source: str = "<fixture>") -> FixtureResponse:
    """Parse fixture text into a ``FixtureResponse``.

    Raises ``FixtureParseError`` when the text is not JSON, is not an object,
    or carries a ``status``/``timeout`` of the wrong shape.
    """

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FixtureParseError(source, f"invalid JSON ({exc})") from exc

    if not isinstance(document, dict):
        raise FixtureParseError(source, f"expected a JSON object, got {type(document).__name__}")

    body = dict(document)
    status = body.pop("status", DEFAULT_STATUS)
    timeout = body.pop("timeout", DEFAULT_TIMEOUT_MS)

    if not isinstance(status, int) or isinstance(status, bool) or not 100 <= status <= 599:
        raise FixtureParseError(source, f"status must be an HTTP status code, got {status!r}")
    if not _is_number(timeout) or timeout < 0:
        raise FixtureParseError(source, f"timeout must be a non-negative number, got {timeout!r}")

    return FixtureResponse(status=status, timeout_ms=int(timeout), body=body)


async def load_fixture(path: Path | str) -> FixtureResponse:
    """Read and parse a fixture file without blocking the event loop."""

    source = str(path)
    try:
        async with aiofiles.open(path, mode="r", encoding="utf-8") as fh:
            text = await fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FixtureReadError(source, str(exc)) from exc
    return parse_fixture(text, source)
