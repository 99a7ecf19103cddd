# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Owner-scoped task records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from todo_api.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class Todo:
    """A task owned by exactly one user.

    owner_id is stamped at creation and carried unchanged through every
    revision; only title and description are editable.
    """

    id: str
    title: str
    description: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.owner_id:
            raise InvariantViolation("owner id is required", field="owner_id")
        if self.updated_at < self.created_at:
            raise InvariantViolation("updated_at precedes created_at", field="updated_at")

    def revise(self, *, title: str, description: str, updated_at: datetime) -> Todo:
        return Todo(
            id=self.id,
            title=title,
            description=description,
            owner_id=self.owner_id,
            created_at=self.created_at,
            updated_at=updated_at,
        )


@dataclass(slots=True, frozen=True)
class NewTodo:
    title: str
    description: str
    owner_id: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class TodoPage:
    page: int
    limit: int
    total: int
    items: list[Todo] = field(default_factory=list)
