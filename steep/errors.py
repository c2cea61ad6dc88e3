"""
Errors surfaced to API callers.

graphql-core copies an ``extensions`` mapping from the original exception
onto the GraphQL error it reports, so every error here carries its code.
"""

from __future__ import annotations

from typing import Any


class SteepError(Exception):
    """Base class for caller-facing errors."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code}


class ValidationError(SteepError):
    """Caller-correctable input problem (unknown ids, bad tea type, duplicates)."""

    code = "BAD_USER_INPUT"


class AuthenticationError(SteepError):
    """Identity is required, invalid or stale."""

    code = "UNAUTHENTICATED"
