"""Command line entrypoint and settings."""

from __future__ import annotations

import logging

from fixture_mock import __main__ as cli
from fixture_mock.config import Settings, truthy


def test_settings_from_env():
    settings = Settings.from_env(
        {"MOCK_HOST": "127.0.0.1", "MOCK_PORT": "9000", "MOCK_ROOT": "/srv/mocks", "MOCK_VERBOSE": "yes"}
    )
    assert settings == Settings(host="127.0.0.1", port=9000, root="/srv/mocks", mount_root="/", verbose=True)
    assert settings.log_level == "debug"


def test_settings_defaults():
    assert Settings.from_env({}) == Settings(host="0.0.0.0", port=8080, root="./mock-api", mount_root="/")


def test_truthy():
    assert truthy("On")
    assert not truthy(None)
    assert not truthy("0")


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv("MOCK_PORT", "9090")
    monkeypatch.setenv("MOCK_HOST", "10.0.0.1")

    assert cli.parse_settings([]).port == 9090
    settings = cli.parse_settings(["-p", "7000", "-M", "fixtures", "--mount-root", "/api", "-v"])
    assert settings == Settings(host="10.0.0.1", port=7000, root="fixtures", mount_root="/api", verbose=True)


def test_missing_root_exits_with_error(tmp_path, monkeypatch, caplog):
    called = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: called.append(kwargs))

    with caplog.at_level(logging.ERROR, logger="fixture_mock"):
        assert cli.main(["-M", str(tmp_path / "missing")]) == 1

    assert called == []
    assert "Static mocks were not found" in caplog.text


def test_main_runs_uvicorn(mock_root, write_fixture, monkeypatch):
    write_fixture("health.json", {"ok": True})
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    assert cli.main(["-M", str(mock_root), "-i", "127.0.0.1", "-p", "8181"]) == 0

    (app, kwargs) = calls[0]
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8181
    assert kwargs["log_level"] == "info"
    assert [r.router_path for r in app.state.fixture_routes] == ["/health"]
