# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps

from flask import g, request

from todo_api.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from todo_api.domain.users.repositories import TokenService
from todo_api.infrastructure.audit import AuditAction, audit_log
from todo_api.shared.errors import UnauthorizedError
from todo_api.shared.logging import logger

_SCHEME = "Bearer"


def parse_bearer(header: str | None) -> str | None:
    """Return the token from an exact ``Bearer <token>`` header, else None."""
    if not header:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != _SCHEME or not parts[1]:
        return None
    return parts[1]


def authed_user_id() -> str:
    """Caller id bound by the gate for the current request."""
    user_id = getattr(g, "user_id", None)
    if not user_id:
        raise UnauthorizedError()
    return user_id


class BearerAuthGate:
    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self, header: str | None) -> str:
        token = parse_bearer(header)
        if token is None:
            logger.warning(
                f"auth.gate: missing or malformed Authorization on {request.method} {request.path}"
            )
            raise UnauthorizedError()
        try:
            return self._tokens.validate(token)
        except TokenExpiredError:
            logger.info(f"auth.gate: expired token on {request.method} {request.path}")
            raise UnauthorizedError() from None
        except InvalidTokenError:
            logger.warning(f"auth.gate: invalid token on {request.method} {request.path}")
            audit_log(
                AuditAction.ACCESS_DENIED,
                details={"path": request.path, "reason": "invalid_token"},
                success=False,
            )
            raise UnauthorizedError() from None

    def __call__(self, view):
        @wraps(view)
        def inner(*args, **kwargs):
            g.user_id = self.authenticate(request.headers.get("Authorization"))
            logger.debug(f"Auth OK: user={g.user_id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return inner
