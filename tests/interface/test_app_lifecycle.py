"""
Tests for the application lifespan and the process entry point.
"""

import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from repo_insights import main
from repo_insights.infrastructure.config import get_settings
from repo_insights.interface import dependencies
from repo_insights.interface.app import GRAPHQL_PATH, create_app


@pytest.fixture
def settings_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_example")
    monkeypatch.setenv("PORT", "4100")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_lifespan_owns_http_client(settings_env, caplog):
    caplog.set_level(logging.INFO, logger="repo_insights.interface.app")

    with TestClient(create_app()):
        assert dependencies._http_client is not None
        assert dependencies.get_repository_host() is not None

    assert dependencies._http_client is None
    assert "Upstream HTTP client ready" in caplog.text
    assert "Upstream HTTP client closed" in caplog.text


def test_graphql_is_mounted_under_graphql_path():
    paths = {route.path for route in create_app().routes}

    assert GRAPHQL_PATH == "/graphql"
    assert GRAPHQL_PATH in paths


def test_configure_logging_quiets_httpx(settings_env):
    httpx_logger = logging.getLogger("httpx")
    previous = httpx_logger.level
    try:
        main.configure_logging(get_settings())

        assert httpx_logger.level == logging.WARNING
    finally:
        httpx_logger.setLevel(previous)


def test_main_runs_app_factory_with_settings(settings_env):
    with patch.object(main, "configure_logging"), patch.object(main.uvicorn, "run") as run:
        main.main()

    run.assert_called_once_with(
        "repo_insights.interface.app:create_app",
        factory=True,
        host=get_settings().host,
        port=4100,
        log_level=get_settings().log_level.lower(),
    )
