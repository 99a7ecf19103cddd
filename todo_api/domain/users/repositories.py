# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import NewUser, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def add(self, user: NewUser) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, hashed: str, password: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user_id: str, now: datetime | None = None) -> str: ...
    def validate(self, token: str, now: datetime | None = None) -> str: ...
