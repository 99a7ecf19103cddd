# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from todo_api.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:
    """Registered identity. password_hash never holds the plaintext."""

    id: str
    name: str
    email: str
    password_hash: str

    def __post_init__(self) -> None:
        if not self.email:
            raise InvariantViolation("email is required", field="email")
        if not self.password_hash:
            raise InvariantViolation("password hash is required", field="password_hash")


@dataclass(slots=True, frozen=True)
class NewUser:
    name: str
    email: str
    password_hash: str
