"""
Authentication - who is calling and how they prove it.

- passwords: bcrypt hashing with a randomized work factor
- tokens: signed, expiring JWTs issued at login/signup
- context: per-request, lazily verified identity
"""

from steep.auth.context import (
    IdentityResult,
    RequestContext,
    RequestIdentity,
    extract_bearer_token,
)
from steep.auth.passwords import PasswordCheck, PasswordHasher
from steep.auth.tokens import (
    ExpiredToken,
    InvalidToken,
    TokenClaims,
    TokenError,
    TokenService,
    UnexpirableToken,
)

__all__ = [
    # Request identity
    "IdentityResult",
    "RequestContext",
    "RequestIdentity",
    "extract_bearer_token",
    # Passwords
    "PasswordCheck",
    "PasswordHasher",
    # Tokens
    "TokenClaims",
    "TokenService",
    "TokenError",
    "InvalidToken",
    "ExpiredToken",
    "UnexpirableToken",
]
