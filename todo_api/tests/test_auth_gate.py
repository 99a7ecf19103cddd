from __future__ import annotations

from datetime import timedelta

import pytest
from flask import Flask, g, jsonify

from conftest import OTHER_SECRET, SECRET, make_config
from todo_api.application.services.tokens import JwtTokenService
from todo_api.infrastructure.auth import BearerAuthGate, parse_bearer
from todo_api.shared.clock import utc_now
from todo_api.shared.middleware import configure_error_handling

TOKENS = JwtTokenService(SECRET)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app, make_config())
    gate = BearerAuthGate(TOKENS)

    @app.get("/whoami")
    @gate
    def whoami():
        return jsonify({"user_id": g.user_id})

    return app


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Bearer ", None),
        ("bearer abc", None),
        ("Token abc", None),
        ("Bearer abc def", None),
        ("Bearer  abc", None),
    ],
)
def test_parse_bearer_requires_exact_shape(header: str | None, expected: str | None) -> None:
    assert parse_bearer(header) == expected


def test_valid_token_binds_user_id(flask_app: Flask) -> None:
    token = TOKENS.issue("user-42")

    with flask_app.test_client() as client:
        response = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json() == {"user_id": "user-42"}


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": f"Bearer {JwtTokenService(OTHER_SECRET).issue('user-42')}"},
        {"Authorization": f"Bearer {TOKENS.issue('user-42', now=utc_now() - timedelta(hours=73))}"},
    ],
)
def test_rejections_share_one_generic_response(flask_app: Flask, headers: dict[str, str]) -> None:
    with flask_app.test_client() as client:
        response = client.get("/whoami", headers=headers)

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized", "message": "Unauthorized"}
