# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from todo_api.domain.todos.entities import NewTodo
from todo_api.domain.todos.entities import Todo as DomainTodo
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.infrastructure.db import SessionFactory
from todo_api.infrastructure.db.models import Todo
from todo_api.infrastructure.unit_of_work import unit_of_work_scope
from todo_api.shared.clock import ensure_aware
from todo_api.shared.errors import StoreError


def _to_domain(row: Todo) -> DomainTodo:
    return DomainTodo(
        id=row.id,
        title=row.title,
        description=row.description or "",
        owner_id=row.owner_id,
        created_at=ensure_aware(row.created_at),
        updated_at=ensure_aware(row.updated_at),
    )


class SqlAlchemyTodoRepository(TodoRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, todo: NewTodo) -> DomainTodo:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = Todo(
                    title=todo.title,
                    description=todo.description,
                    owner_id=todo.owner_id,
                    created_at=todo.created_at,
                    updated_at=todo.updated_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except SQLAlchemyError as exc:
            raise StoreError("todos.add") from exc

    def get_by_id(self, todo_id: str) -> DomainTodo | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(Todo, todo_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise StoreError("todos.get_by_id") from exc

    def update(self, todo: DomainTodo) -> DomainTodo | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                matched = (
                    session.query(Todo)
                    .filter(Todo.id == todo.id, Todo.owner_id == todo.owner_id)
                    .update(
                        {
                            Todo.title: todo.title,
                            Todo.description: todo.description,
                            Todo.updated_at: todo.updated_at,
                        },
                        synchronize_session=False,
                    )
                )
        except SQLAlchemyError as exc:
            raise StoreError("todos.update") from exc
        return todo if matched else None

    def delete(self, todo_id: str, owner_id: str) -> bool:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                deleted = (
                    session.query(Todo)
                    .filter(Todo.id == todo_id, Todo.owner_id == owner_id)
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError as exc:
            raise StoreError("todos.delete") from exc
        return deleted > 0

    def list_for_owner(
        self, owner_id: str, *, offset: int, limit: int
    ) -> tuple[list[DomainTodo], int]:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                rows = (
                    session.query(Todo)
                    .filter(Todo.owner_id == owner_id)
                    .order_by(Todo.created_at.asc(), Todo.id.asc())
                    .offset(offset)
                    .limit(limit)
                    .all()
                )
                total = (
                    session.query(func.count(Todo.id))
                    .filter(Todo.owner_id == owner_id)
                    .scalar()
                )
                return [_to_domain(row) for row in rows], int(total or 0)
        except SQLAlchemyError as exc:
            raise StoreError("todos.list_for_owner") from exc
