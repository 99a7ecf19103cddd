# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from todo_api.application.services.todo_service import TodoService
from todo_api.infrastructure.audit import AuditAction, audit_log
from todo_api.infrastructure.auth import BearerAuthGate, authed_user_id
from todo_api.interfaces.http.dto.todos import (
    PaginationQueryDTO,
    TodoDTO,
    TodoPageDTO,
    TodoRequestDTO,
)
from todo_api.shared.errors.validation import raise_validation_error
from todo_api.shared.logging import logger


def _parse_body() -> TodoRequestDTO:
    try:
        return TodoRequestDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class TodosController:
    def __init__(self, *, service: TodoService, auth_gate: BearerAuthGate) -> None:
        self._service = service
        self._auth_gate = auth_gate

    def as_blueprint(self) -> Blueprint:
        gate = self._auth_gate
        bp = Blueprint("todos", __name__)
        bp.add_url_rule("/todos", view_func=gate(self.list_todos), methods=["GET"])
        bp.add_url_rule("/todos", view_func=gate(self.create), methods=["POST"])
        bp.add_url_rule("/todos/<todo_id>", view_func=gate(self.get), methods=["GET"])
        bp.add_url_rule("/todos/<todo_id>", view_func=gate(self.update), methods=["PUT"])
        bp.add_url_rule("/todos/<todo_id>", view_func=gate(self.delete), methods=["DELETE"])
        return bp

    def list_todos(self) -> tuple[Response, int]:
        t0 = perf_counter()
        user_id = authed_user_id()
        try:
            query = PaginationQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        page = self._service.list(user_id, query.page, query.limit)
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"todos.list: ok (user_id={user_id}, page={page.page}, n={len(page.items)}, "
            f"total={page.total}, dt_ms={dt:.0f})"
        )
        return jsonify(TodoPageDTO.from_page(page).model_dump(mode="json")), 200

    def create(self) -> tuple[Response, int]:
        user_id = authed_user_id()
        dto = _parse_body()
        todo = self._service.create(user_id, dto.title, dto.description)
        audit_log(AuditAction.TODO_CREATED, user_id=user_id, details={"todo_id": todo.id})
        return jsonify(TodoDTO.from_entity(todo).model_dump(mode="json")), 200

    def get(self, todo_id: str) -> tuple[Response, int]:
        todo = self._service.get(todo_id, authed_user_id())
        return jsonify(TodoDTO.from_entity(todo).model_dump(mode="json")), 200

    def update(self, todo_id: str) -> tuple[Response, int]:
        user_id = authed_user_id()
        dto = _parse_body()
        todo = self._service.update(todo_id, user_id, dto.title, dto.description)
        audit_log(AuditAction.TODO_UPDATED, user_id=user_id, details={"todo_id": todo.id})
        return jsonify(TodoDTO.from_entity(todo).model_dump(mode="json")), 200

    def delete(self, todo_id: str) -> tuple[str, int]:
        user_id = authed_user_id()
        self._service.delete(todo_id, user_id)
        audit_log(AuditAction.TODO_DELETED, user_id=user_id, details={"todo_id": todo_id})
        return "", 204
