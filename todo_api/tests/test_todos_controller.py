from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime

import pytest
from flask.testing import FlaskClient

from conftest import TickingClock, bearer, fast_hasher, make_config
from todo_api.app import create_app
from todo_api.application.services.todo_service import MAX_PAGE
from todo_api.container import Container
from todo_api.infrastructure.repositories.memory import InMemoryTodoRepository
from todo_api.shared.errors import StoreError
from todo_api.shared.logging import logger


def _create(client: FlaskClient, token: str, **body) -> dict:
    response = client.post("/todos", json=body, headers=bearer(token))
    assert response.status_code == 200, response.get_json()
    return response.get_json()


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/todos"),
        ("post", "/todos"),
        ("get", f"/todos/{uuid.uuid4().hex}"),
        ("put", f"/todos/{uuid.uuid4().hex}"),
        ("delete", f"/todos/{uuid.uuid4().hex}"),
    ],
)
def test_todo_routes_require_token(client: FlaskClient, method: str, path: str) -> None:
    response = getattr(client, method)(path, json={"title": "x"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_create_stamps_owner_from_token(
    client: FlaskClient, register: Callable[..., str], container: Container
) -> None:
    token = register()
    user_id = container.token_service.validate(token)

    todo = _create(client, token, title="A", description="first", owner_id="someone-else")

    assert todo["owner_id"] == user_id
    assert todo["title"] == "A"
    assert todo["description"] == "first"
    assert todo["created_at"] == todo["updated_at"]
    assert set(todo) == {"id", "title", "description", "owner_id", "created_at", "updated_at"}


def test_create_requires_title(client: FlaskClient, register: Callable[..., str]) -> None:
    response = client.post("/todos", json={"description": "no title"}, headers=bearer(register()))

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["title"]


def test_update_by_owner(client: FlaskClient, register: Callable[..., str]) -> None:
    token = register()
    todo = _create(client, token, title="A")

    response = client.put(
        f"/todos/{todo['id']}", json={"title": "B", "description": "new"}, headers=bearer(token)
    )

    assert response.status_code == 200
    updated = response.get_json()
    assert updated["id"] == todo["id"]
    assert updated["title"] == "B"
    assert updated["description"] == "new"
    assert updated["owner_id"] == todo["owner_id"]
    assert updated["created_at"] == todo["created_at"]
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(
        todo["updated_at"]
    )


def test_other_user_gets_403_whatever_the_body(
    client: FlaskClient, register: Callable[..., str], container: Container
) -> None:
    alice, bob = register(), register()
    todo = _create(client, alice, title="private")
    bob_id = container.token_service.validate(bob)

    update = client.put(
        f"/todos/{todo['id']}",
        json={"title": "mine now", "owner_id": bob_id, "id": todo["id"]},
        headers=bearer(bob),
    )
    delete = client.delete(f"/todos/{todo['id']}", headers=bearer(bob))
    read = client.get(f"/todos/{todo['id']}", headers=bearer(bob))

    assert update.status_code == delete.status_code == read.status_code == 403
    assert update.get_json() == {"error": "forbidden", "message": "Forbidden"}
    still_there = client.get(f"/todos/{todo['id']}", headers=bearer(alice))
    assert still_there.status_code == 200
    assert still_there.get_json()["title"] == "private"


def test_delete_own_todo_returns_204(client: FlaskClient, register: Callable[..., str]) -> None:
    token = register()
    todo = _create(client, token, title="A")

    response = client.delete(f"/todos/{todo['id']}", headers=bearer(token))

    assert response.status_code == 204
    assert response.data == b""
    assert client.get(f"/todos/{todo['id']}", headers=bearer(token)).status_code == 404


@pytest.mark.parametrize("todo_id", [uuid.uuid4().hex, "does-not-exist"])
def test_missing_todo_returns_404(
    client: FlaskClient, register: Callable[..., str], todo_id: str
) -> None:
    token = register()

    delete = client.delete(f"/todos/{todo_id}", headers=bearer(token))
    update = client.put(f"/todos/{todo_id}", json={"title": "x"}, headers=bearer(token))

    assert delete.status_code == update.status_code == 404
    assert delete.get_json() == {"error": "todo_not_found", "message": "Todo not found"}


def test_list_paginates(client: FlaskClient, register: Callable[..., str]) -> None:
    token = register()
    for i in range(15):
        _create(client, token, title=f"todo {i}")

    first = client.get("/todos?page=1&limit=10", headers=bearer(token)).get_json()
    second = client.get("/todos?page=2&limit=10", headers=bearer(token)).get_json()

    assert (first["page"], first["limit"], first["total"]) == (1, 10, 15)
    assert (second["page"], second["limit"], second["total"]) == (2, 10, 15)
    assert len(first["data"]) == 10
    assert len(second["data"]) == 5
    assert [t["title"] for t in first["data"] + second["data"]] == [
        f"todo {i}" for i in range(15)
    ]


def test_list_defaults_and_isolation(client: FlaskClient, register: Callable[..., str]) -> None:
    alice, bob = register(), register()
    _create(client, alice, title="alice's")

    response = client.get("/todos", headers=bearer(bob))

    assert response.status_code == 200
    assert response.get_json() == {"data": [], "page": 1, "limit": 10, "total": 0}


@pytest.mark.parametrize("query", ["page=0", "limit=0", "page=-1", "page=abc", "limit=1.5"])
def test_list_rejects_bad_paging(
    client: FlaskClient, register: Callable[..., str], query: str
) -> None:
    response = client.get(f"/todos?{query}", headers=bearer(register()))

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


class ExplodingTodoRepository(InMemoryTodoRepository):
    def list_for_owner(self, owner_id: str, *, offset: int, limit: int):
        raise RuntimeError("connection refused by db-host-01")


def _app_with_broken_store(expose_error_details: bool):
    container = Container(
        make_config(expose_error_details=expose_error_details),
        clock=TickingClock(),
        password_hasher=fast_hasher(),
    )
    container.todo_repository = ExplodingTodoRepository()
    return create_app(container=container), container


def test_store_failure_returns_generic_500() -> None:
    app, container = _app_with_broken_store(expose_error_details=False)
    token = container.token_service.issue(uuid.uuid4().hex)

    response = app.test_client().get("/todos", headers=bearer(token))

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}


def test_store_failure_detail_only_with_diagnostics_flag() -> None:
    app, container = _app_with_broken_store(expose_error_details=True)
    token = container.token_service.issue(uuid.uuid4().hex)

    response = app.test_client().get("/todos", headers=bearer(token))

    assert response.status_code == 500
    assert "connection refused" in response.get_json()["detail"]


def test_responses_carry_security_headers(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-ID"]


def _sqlalchemy_client() -> tuple[FlaskClient, str]:
    container = Container(
        make_config(backend="sqlalchemy", url="sqlite://"),
        clock=TickingClock(),
        password_hasher=fast_hasher(),
    )
    client = create_app(container=container).test_client()
    return client, container.token_service.issue(uuid.uuid4().hex)


@pytest.mark.parametrize("page", [str(10**20), str(2**63), str(MAX_PAGE + 1)])
def test_page_beyond_the_upper_bound_is_rejected(page: str) -> None:
    client, token = _sqlalchemy_client()

    response = client.get(f"/todos?page={page}&limit=10", headers=bearer(token))

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["page"]


def test_last_allowed_page_is_empty_not_an_error() -> None:
    client, token = _sqlalchemy_client()

    response = client.get(f"/todos?page={MAX_PAGE}&limit=1000", headers=bearer(token))

    assert response.status_code == 200
    assert response.get_json() == {"data": [], "page": MAX_PAGE, "limit": 100, "total": 0}


class FailingStoreTodoRepository(InMemoryTodoRepository):
    def list_for_owner(self, owner_id: str, *, offset: int, limit: int):
        raise StoreError("todos.list_for_owner")


def test_store_error_hides_the_operation_from_clients() -> None:
    container = Container(make_config(), clock=TickingClock(), password_hasher=fast_hasher())
    container.todo_repository = FailingStoreTodoRepository()
    app = create_app(container=container)
    token = container.token_service.issue(uuid.uuid4().hex)
    messages: list[str] = []
    sink_id = logger.add(lambda message: messages.append(str(message)), level="ERROR")
    try:
        response = app.test_client().get("/todos", headers=bearer(token))
    finally:
        logger.remove(sink_id)

    assert response.status_code == 500
    assert response.get_json() == {"error": "store_error"}
    assert any("operation=todos.list_for_owner" in line for line in messages)
