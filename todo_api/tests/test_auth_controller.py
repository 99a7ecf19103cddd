from __future__ import annotations

from collections.abc import Callable

from flask.testing import FlaskClient

from todo_api.container import Container


def test_register_returns_token(client: FlaskClient, container: Container) -> None:
    response = client.post(
        "/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "secret123"},
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert set(payload) == {"token"}
    user = container.user_repository.find_by_email("alice@example.com")
    assert user is not None
    assert container.token_service.validate(payload["token"]) == user.id
    assert user.password_hash != "secret123"


def test_register_duplicate_email_returns_400(
    client: FlaskClient, register: Callable[..., str], container: Container
) -> None:
    register(email="alice@example.com")

    response = client.post(
        "/register",
        json={"name": "Other", "email": "alice@example.com", "password": "another-pass"},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "user_already_exists"
    assert "token" not in response.get_json()
    assert len(container.user_repository) == 1


def test_register_invalid_payload_returns_400(client: FlaskClient) -> None:
    response = client.post("/register", json={"name": "Alice", "password": "short"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["email", "password"]


def test_register_rejects_malformed_email(client: FlaskClient) -> None:
    response = client.post(
        "/register", json={"name": "Alice", "email": "not-an-email", "password": "secret123"}
    )

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["email"]


def test_register_rejects_non_json_body(client: FlaskClient) -> None:
    response = client.post("/register", data="name=alice", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_login_returns_fresh_token(
    client: FlaskClient, register: Callable[..., str], container: Container
) -> None:
    register(email="alice@example.com", password="secret123")

    response = client.post("/login", json={"email": "alice@example.com", "password": "secret123"})

    assert response.status_code == 200
    user = container.user_repository.find_by_email("alice@example.com")
    assert container.token_service.validate(response.get_json()["token"]) == user.id


def test_login_failures_do_not_reveal_which_field_was_wrong(
    client: FlaskClient, register: Callable[..., str]
) -> None:
    register(email="alice@example.com", password="secret123")

    wrong_password = client.post(
        "/login", json={"email": "alice@example.com", "password": "nope-nope"}
    )
    unknown_email = client.post(
        "/login", json={"email": "bob@example.com", "password": "secret123"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.get_json() == unknown_email.get_json()
    assert wrong_password.get_json() == {
        "error": "invalid_credentials",
        "message": "invalid email or password",
    }


def test_login_missing_fields_returns_400(client: FlaskClient) -> None:
    response = client.post("/login", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["password"]
