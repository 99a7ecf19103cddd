# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import NewTodo, Todo


class TodoRepository(Protocol):
    def add(self, todo: NewTodo) -> Todo: ...

    def get_by_id(self, todo_id: str) -> Todo | None: ...

    def update(self, todo: Todo) -> Todo | None:
        """Persist title/description/updated_at where (id, owner_id) match."""
        ...

    def delete(self, todo_id: str, owner_id: str) -> bool: ...

    def list_for_owner(
        self, owner_id: str, *, offset: int, limit: int
    ) -> tuple[list[Todo], int]: ...
