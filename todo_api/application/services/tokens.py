# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, expiring bearer tokens.

Tokens are HS256 JWTs carrying ``sub`` (the user id), ``iat`` and ``exp``.
Expiry is checked against an explicit ``now`` rather than the library's wall
clock so callers control the validity window.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

import jwt

from todo_api.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from todo_api.domain.users.repositories import TokenService
from todo_api.shared.clock import Clock, utc_now

DEFAULT_TTL = timedelta(hours=72)
ALGORITHM = "HS256"


class JwtTokenService(TokenService):
    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        now = now or self._clock()
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": math.ceil((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def validate(self, token: str, now: datetime | None = None) -> str:
        now = now or self._clock()
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={
                    "require": ["sub", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError() from exc

        subject = claims.get("sub")
        expires_at = claims.get("exp")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError()
        if isinstance(expires_at, bool) or not isinstance(expires_at, int | float):
            raise InvalidTokenError()
        if now.timestamp() >= expires_at:
            raise TokenExpiredError()
        return subject
