from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask

from resume_backend.app import create_app
from resume_backend.container import Container
from resume_backend.shared.config import AppConfig, AuthConfig, DatabaseConfig


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key="test-secret-key",
        database=DatabaseConfig(url="sqlite://"),
        auth=AuthConfig(
            jwt_secret="test-jwt-secret",
            bcrypt_rounds=4,
            session_sweep_interval=0,
        ),
    )


@pytest.fixture()
def container(config: AppConfig) -> Iterator[Container]:
    container = Container(config)
    yield container
    container.database.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)
