# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""In-process repositories with the same contracts as the SQLAlchemy ones."""

from __future__ import annotations

import uuid
from threading import Lock

from todo_api.domain.todos.entities import NewTodo, Todo
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.domain.users.entities import NewUser, User
from todo_api.domain.users.exceptions import DuplicateUserError
from todo_api.domain.users.repositories import UserRepository


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._by_id: dict[str, User] = {}
        self._by_email: dict[str, str] = {}

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._by_email.get(email)
            return self._by_id.get(user_id) if user_id else None

    def add(self, user: NewUser) -> User:
        with self._lock:
            if user.email in self._by_email:
                raise DuplicateUserError()
            stored = User(
                id=_new_id(),
                name=user.name,
                email=user.email,
                password_hash=user.password_hash,
            )
            self._by_id[stored.id] = stored
            self._by_email[stored.email] = stored.id
            return stored

    def __len__(self) -> int:
        return len(self._by_id)


class InMemoryTodoRepository(TodoRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._rows: dict[str, Todo] = {}

    def add(self, todo: NewTodo) -> Todo:
        stored = Todo(
            id=_new_id(),
            title=todo.title,
            description=todo.description,
            owner_id=todo.owner_id,
            created_at=todo.created_at,
            updated_at=todo.updated_at,
        )
        with self._lock:
            self._rows[stored.id] = stored
        return stored

    def get_by_id(self, todo_id: str) -> Todo | None:
        with self._lock:
            return self._rows.get(todo_id)

    def update(self, todo: Todo) -> Todo | None:
        with self._lock:
            current = self._rows.get(todo.id)
            if current is None or current.owner_id != todo.owner_id:
                return None
            stored = current.revise(
                title=todo.title,
                description=todo.description,
                updated_at=todo.updated_at,
            )
            self._rows[todo.id] = stored
            return stored

    def delete(self, todo_id: str, owner_id: str) -> bool:
        with self._lock:
            current = self._rows.get(todo_id)
            if current is None or current.owner_id != owner_id:
                return False
            del self._rows[todo_id]
            return True

    def list_for_owner(
        self, owner_id: str, *, offset: int, limit: int
    ) -> tuple[list[Todo], int]:
        with self._lock:
            owned = sorted(
                (row for row in self._rows.values() if row.owner_id == owner_id),
                key=lambda row: (row.created_at, row.id),
            )
        return owned[offset : offset + limit], len(owned)

    def __len__(self) -> int:
        return len(self._rows)
