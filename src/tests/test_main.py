"""Tests for the server entry point."""

import pytest
from fastapi import FastAPI

import plainwiki.main


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    """Keep run() from installing handlers on the root logger."""
    monkeypatch.setattr(plainwiki.main, "configure_logging", lambda level: None)


@pytest.fixture
def uvicorn_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(
        plainwiki.main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )
    return calls


def test_run_serves_on_configured_port(monkeypatch, uvicorn_calls):
    monkeypatch.setattr(plainwiki.main.settings, "port", 8080)
    plainwiki.main.run()

    assert len(uvicorn_calls) == 1
    app, kwargs = uvicorn_calls[0]
    assert isinstance(app, FastAPI)
    assert kwargs["port"] == 8080
    assert kwargs["access_log"] is False


def test_run_exits_when_templates_fail(monkeypatch, tmp_path, uvicorn_calls):
    monkeypatch.setattr(plainwiki.main.settings, "templates_dir", tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        plainwiki.main.run()
    assert excinfo.value.code == 1
    assert uvicorn_calls == []


def test_routes_registered():
    app = plainwiki.main.create_app()
    methods = {route.path: route.methods for route in app.routes}
    assert "GET" in methods["/view/{title}"]
    assert "GET" in methods["/edit/{title}"]
    assert methods["/save/{title}"] == {"POST"}
