# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from todo_api.application.use_cases.users.login_user import LoginUserUseCase
from todo_api.application.use_cases.users.register_user import RegisterUserUseCase
from todo_api.domain.users.exceptions import InvalidCredentialsError
from todo_api.infrastructure.audit import AuditAction, audit_log
from todo_api.interfaces.http.dto.auth import (
    LoginRequestDTO,
    RegisterRequestDTO,
    TokenResponseDTO,
)
from todo_api.shared.errors.validation import raise_validation_error
from todo_api.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.name, dto.email, dto.password)

        audit_log(AuditAction.REGISTER, user_id=user.id, success=True)
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(TokenResponseDTO(token=token).model_dump()), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            user, token = self._login_use_case.execute(dto.email, dto.password)
        except InvalidCredentialsError:
            audit_log(AuditAction.LOGIN_FAILED, success=False)
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=user.id, success=True)
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(TokenResponseDTO(token=token).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
