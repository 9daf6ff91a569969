"""Shared fixtures: a temporary mock root and an HTTPX client bound to the app."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, AsyncIterator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fixture_mock.config import Settings
from fixture_mock.scan import build_registrations
from fixture_mock.server import create_app


WriteFixture = Callable[[str, Any], Path]


@pytest.fixture
def mock_root(tmp_path: Path) -> Path:
    root = tmp_path / "mock-api"
    root.mkdir()
    return root


@pytest.fixture
def write_fixture(mock_root: Path) -> WriteFixture:
    """Write a fixture below the mock root; dicts are JSON encoded, strings written raw."""

    def _write(relative: str, content: Any) -> Path:
        path = mock_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest_asyncio.fixture
async def make_client(mock_root: Path) -> AsyncIterator[Callable[..., AsyncClient]]:
    """Build the app from the current contents of the mock root."""

    clients: list[AsyncClient] = []

    def _make(mount_root: str = "/") -> AsyncClient:
        settings = Settings(root=str(mock_root), mount_root=mount_root)
        app = create_app(build_registrations(mock_root, mount_root), settings=settings)
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://mock.test")
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()
