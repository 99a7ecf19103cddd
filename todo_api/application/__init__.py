# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services import JwtTokenService, TodoService, WerkzeugPasswordHasher
from .use_cases.users import LoginUserUseCase, RegisterUserUseCase

__all__ = [
    "JwtTokenService",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "TodoService",
    "WerkzeugPasswordHasher",
]
