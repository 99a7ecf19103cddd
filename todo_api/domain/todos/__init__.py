# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import NewTodo, Todo, TodoPage
from .exceptions import ForbiddenError, TodoNotFoundError
from .repositories import TodoRepository

__all__ = [
    "ForbiddenError",
    "NewTodo",
    "Todo",
    "TodoNotFoundError",
    "TodoPage",
    "TodoRepository",
]
