# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_todo_repository import SqlAlchemyTodoRepository

__all__ = ["SqlAlchemyTodoRepository"]
