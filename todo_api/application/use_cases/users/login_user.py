# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from todo_api.domain.users.entities import User
from todo_api.domain.users.exceptions import InvalidCredentialsError
from todo_api.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from todo_api.shared.logging import logger


class LoginUserUseCase:
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

    @cached_property
    def _decoy_hash(self) -> str:
        # Unknown e-mails still pay for one hash check so timing does not reveal them.
        return self._password_hasher.hash("decoy-password-for-unknown-users")

    def execute(self, email: str, password: str) -> tuple[User, str]:
        user = self._users.find_by_email(email)
        if user is None:
            self._password_hasher.verify(self._decoy_hash, password)
            logger.info("auth.login: unknown email")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(user.password_hash, password):
            logger.info(f"auth.login: password mismatch user_id={user.id}")
            raise InvalidCredentialsError()

        return user, self._tokens.issue(user.id)
