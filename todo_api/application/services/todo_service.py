# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Owner-scoped CRUD over todos.

Every mutation first loads the record by id, then compares its owner with the
caller: a missing record is ``TodoNotFoundError``, someone else's record is
``ForbiddenError``. The repository applies the ``(id, owner_id)`` filter a
second time when it writes.
"""

from __future__ import annotations

import re

from todo_api.domain.todos.entities import NewTodo, Todo, TodoPage
from todo_api.domain.todos.exceptions import ForbiddenError, TodoNotFoundError
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.shared.clock import Clock, utc_now
from todo_api.shared.errors import ValidationError
from todo_api.shared.logging import logger

_ID_RE = re.compile(r"^[0-9a-f]{32}$")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PAGE = 1_000_000


def coerce_id(raw: str) -> str | None:
    candidate = (raw or "").strip().lower()
    if not _ID_RE.match(candidate):
        return None
    return candidate


class TodoService:
    def __init__(
        self,
        *,
        todos: TodoRepository,
        clock: Clock = utc_now,
        max_page_size: int = 100,
    ) -> None:
        self._todos = todos
        self._clock = clock
        self._max_page_size = max_page_size

    def create(self, owner_id: str, title: str, description: str) -> Todo:
        now = self._clock()
        todo = self._todos.add(
            NewTodo(
                title=title,
                description=description,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
        )
        logger.debug(f"todos.create: id={todo.id} owner={owner_id}")
        return todo

    def get(self, todo_id: str, caller_id: str) -> Todo:
        return self._load_owned(todo_id, caller_id)

    def update(self, todo_id: str, caller_id: str, title: str, description: str) -> Todo:
        existing = self._load_owned(todo_id, caller_id)
        revised = existing.revise(
            title=title,
            description=description,
            updated_at=max(self._clock(), existing.updated_at),
        )
        stored = self._todos.update(revised)
        if stored is None:
            # Deleted between the ownership check and the write.
            raise TodoNotFoundError()
        return stored

    def delete(self, todo_id: str, caller_id: str) -> None:
        existing = self._load_owned(todo_id, caller_id)
        if not self._todos.delete(existing.id, caller_id):
            raise TodoNotFoundError()

    def list(
        self, owner_id: str, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
    ) -> TodoPage:
        if page < 1 or page > MAX_PAGE:
            raise ValidationError(
                message=f"page must be between 1 and {MAX_PAGE}",
                context={"fields": ["page"]},
            )
        if limit < 1:
            raise ValidationError(
                message="limit must be >= 1", context={"fields": ["limit"]}
            )
        limit = min(limit, self._max_page_size)
        items, total = self._todos.list_for_owner(
            owner_id, offset=(page - 1) * limit, limit=limit
        )
        return TodoPage(page=page, limit=limit, total=total, items=items)

    def _load_owned(self, todo_id: str, caller_id: str) -> Todo:
        normalized = coerce_id(todo_id)
        if normalized is None:
            raise TodoNotFoundError()
        existing = self._todos.get_by_id(normalized)
        if existing is None:
            raise TodoNotFoundError()
        if existing.owner_id != caller_id:
            logger.warning(f"todos.access_denied: id={normalized} caller={caller_id}")
            raise ForbiddenError()
        return existing
