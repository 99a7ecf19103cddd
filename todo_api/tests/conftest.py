from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

os.environ.setdefault("LOG_FILE", "")

from flask import Flask
from flask.testing import FlaskClient

from todo_api.app import create_app
from todo_api.application.services.password_hashing import WerkzeugPasswordHasher
from todo_api.container import Container
from todo_api.shared.clock import utc_now
from todo_api.shared.config import AppConfig, DatabaseConfig, SecurityConfig, TokenConfig

SECRET = "test-signing-secret-0123456789abcdef0123"
OTHER_SECRET = "another-signing-secret-fedcba9876543210"


class TickingClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or utc_now()
        self._step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = value + self._step
        return value


def make_config(
    *,
    backend: str = "memory",
    url: str | None = None,
    expose_error_details: bool = False,
    max_page_size: int = 100,
) -> AppConfig:
    return AppConfig(
        app_env="test",
        log_level="WARNING",
        max_page_size=max_page_size,
        database=DatabaseConfig(backend=backend, url=url),
        tokens=TokenConfig(secret=SECRET, ttl_hours=72),
        security=SecurityConfig(expose_error_details=expose_error_details),
    )


def fast_hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


@pytest.fixture()
def config() -> AppConfig:
    return make_config()


@pytest.fixture()
def container(config: AppConfig) -> Container:
    return Container(config, clock=TickingClock(), password_hasher=fast_hasher())


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def register(client: FlaskClient) -> Callable[..., str]:
    counter = {"n": 0}

    def _register(email: str | None = None, password: str = "correct-horse-1") -> str:
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        response = client.post(
            "/register",
            json={"name": f"User {counter['n']}", "email": email, "password": password},
        )
        assert response.status_code == 200, response.get_json()
        return response.get_json()["token"]

    return _register


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
