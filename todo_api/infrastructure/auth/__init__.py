# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .gate import BearerAuthGate, authed_user_id, parse_bearer

__all__ = ["BearerAuthGate", "authed_user_id", "parse_bearer"]
