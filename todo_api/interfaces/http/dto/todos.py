# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from todo_api.application.services.todo_service import MAX_PAGE
from todo_api.domain.todos.entities import Todo, TodoPage


class TodoRequestDTO(BaseModel):
    """Body for create and update; unknown keys such as ``owner_id`` are ignored."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=2000)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title cannot be blank")
        return value


class PaginationQueryDTO(BaseModel):
    page: int = Field(1, ge=1, le=MAX_PAGE)
    limit: int = Field(10, ge=1)


class TodoDTO(BaseModel):
    id: str
    title: str
    description: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, todo: Todo) -> TodoDTO:
        return cls(
            id=todo.id,
            title=todo.title,
            description=todo.description,
            owner_id=todo.owner_id,
            created_at=todo.created_at,
            updated_at=todo.updated_at,
        )


class TodoPageDTO(BaseModel):
    data: list[TodoDTO]
    page: int
    limit: int
    total: int

    @classmethod
    def from_page(cls, page: TodoPage) -> TodoPageDTO:
        return cls(
            data=[TodoDTO.from_entity(item) for item in page.items],
            page=page.page,
            limit=page.limit,
            total=page.total,
        )
