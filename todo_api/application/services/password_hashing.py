"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from todo_api.domain.users.repositories import PasswordHasher
from todo_api.shared.errors import HashingError
from todo_api.shared.logging import logger

DEFAULT_METHOD = "scrypt:32768:8:1"
DEFAULT_SALT_LENGTH = 16


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(
        self, method: str = DEFAULT_METHOD, salt_length: int = DEFAULT_SALT_LENGTH
    ) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (ValueError, TypeError, MemoryError) as exc:
            logger.error(f"password.hash: failed ({type(exc).__name__})")
            raise HashingError() from exc

    def verify(self, hashed: str, password: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            logger.warning("password.verify: stored hash has an unknown format")
            return False
