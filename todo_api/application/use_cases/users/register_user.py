# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todo_api.domain.users.entities import NewUser, User
from todo_api.domain.users.exceptions import DuplicateUserError
from todo_api.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> tuple[User, str]:
        existing = self._users.find_by_email(email)
        if existing:
            raise DuplicateUserError()
        hashed = self._password_hasher.hash(password)
        persisted = self._users.add(NewUser(name=name, email=email, password_hash=hashed))
        token = self._tokens.issue(persisted.id)
        return persisted, token
