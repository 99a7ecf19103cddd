# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Multi-tenant todo list API with bearer-token authentication."""

__version__ = "1.0.0"
