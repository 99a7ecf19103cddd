# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import NewUser, User
from .exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
)
from .repositories import PasswordHasher, TokenService, UserRepository

__all__ = [
    "DuplicateUserError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "NewUser",
    "PasswordHasher",
    "TokenExpiredError",
    "TokenService",
    "User",
    "UserRepository",
]
