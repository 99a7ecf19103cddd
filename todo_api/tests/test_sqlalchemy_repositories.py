from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from todo_api.domain.todos.entities import NewTodo, Todo
from todo_api.domain.users.entities import NewUser
from todo_api.domain.users.exceptions import DuplicateUserError
from todo_api.infrastructure.db import build_engine, build_session_factory, init_db
from todo_api.infrastructure.health import check_database
from todo_api.infrastructure.repositories import SqlAlchemyTodoRepository, SqlAlchemyUserRepository
from todo_api.shared.config import DatabaseConfig

T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)


@pytest.fixture()
def engine():
    engine = build_engine(DatabaseConfig(url="sqlite://", backend="sqlalchemy"))
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def users(engine) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(build_session_factory(engine))


@pytest.fixture()
def todos(engine) -> SqlAlchemyTodoRepository:
    return SqlAlchemyTodoRepository(build_session_factory(engine))


def _new_todo(owner_id: str, title: str, at: datetime = T0) -> NewTodo:
    return NewTodo(title=title, description="", owner_id=owner_id, created_at=at, updated_at=at)


def test_user_round_trip(users: SqlAlchemyUserRepository) -> None:
    stored = users.add(NewUser(name="Alice", email="alice@example.com", password_hash="h"))

    assert len(stored.id) == 32
    assert users.find_by_email("alice@example.com") == stored
    assert users.find_by_email("ALICE@example.com") is None


def test_unique_email_is_enforced_by_the_store(users: SqlAlchemyUserRepository) -> None:
    users.add(NewUser(name="Alice", email="alice@example.com", password_hash="h"))

    with pytest.raises(DuplicateUserError):
        users.add(NewUser(name="Mallory", email="alice@example.com", password_hash="h2"))

    assert users.find_by_email("alice@example.com").name == "Alice"


def test_todo_round_trip_keeps_utc_timestamps(todos: SqlAlchemyTodoRepository) -> None:
    owner = uuid.uuid4().hex
    stored = todos.add(_new_todo(owner, "A"))

    fetched = todos.get_by_id(stored.id)

    assert fetched == stored
    assert fetched.created_at == T0
    assert fetched.created_at.tzinfo is not None


def test_update_is_filtered_by_owner(todos: SqlAlchemyTodoRepository) -> None:
    owner, intruder = uuid.uuid4().hex, uuid.uuid4().hex
    stored = todos.add(_new_todo(owner, "A"))
    later = T0 + timedelta(minutes=5)

    forged = Todo(
        id=stored.id,
        title="pwned",
        description="",
        owner_id=intruder,
        created_at=stored.created_at,
        updated_at=later,
    )

    assert todos.update(forged) is None
    assert todos.get_by_id(stored.id).title == "A"

    revised = stored.revise(title="B", description="changed", updated_at=later)
    assert todos.update(revised) == revised
    fetched = todos.get_by_id(stored.id)
    assert (fetched.title, fetched.description, fetched.updated_at) == ("B", "changed", later)
    assert fetched.created_at == T0


def test_delete_is_filtered_by_owner(todos: SqlAlchemyTodoRepository) -> None:
    owner, intruder = uuid.uuid4().hex, uuid.uuid4().hex
    stored = todos.add(_new_todo(owner, "A"))

    assert todos.delete(stored.id, intruder) is False
    assert todos.get_by_id(stored.id) is not None
    assert todos.delete(stored.id, owner) is True
    assert todos.get_by_id(stored.id) is None
    assert todos.delete(stored.id, owner) is False


def test_list_orders_by_creation_and_counts(todos: SqlAlchemyTodoRepository) -> None:
    owner, other = uuid.uuid4().hex, uuid.uuid4().hex
    for i in reversed(range(15)):
        todos.add(_new_todo(owner, f"todo {i}", at=T0 + timedelta(seconds=i)))
    todos.add(_new_todo(other, "foreign"))

    items, total = todos.list_for_owner(owner, offset=10, limit=10)

    assert total == 15
    assert [t.title for t in items] == [f"todo {i}" for i in range(10, 15)]


def test_health_probe(engine) -> None:
    assert check_database(engine) is True
