"""
Request context - who is calling, resolved at most once per request.

The bearer token is pulled out of the headers when the request arrives, but
it is only verified when a resolver first asks for the identity. Resolvers
that never ask (public tea listing, for instance) never pay for it. Every
later ask within the same request awaits the same verification.

Token failures do not fail the request here: they collapse to anonymous,
with the cause kept on the result. Resolvers that need an identity call
``require()``, which turns absence or failure into an AuthenticationError.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

from steep.auth.tokens import TokenError, TokenService
from steep.errors import AuthenticationError

if TYPE_CHECKING:
    from steep.services.accounts import AccountService
    from steep.services.teas import TeaService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(headers: Mapping[str, str]) -> str | None:
    """
    Pull the bearer token out of the ``authorization`` header.

    Accepts ``Bearer <token>`` and a bare token with no scheme. Any other
    scheme, or an empty header, means no credential.
    """
    value = None
    for name, header in headers.items():
        if name.lower() == "authorization":
            value = header
            break
    if not value or not value.strip():
        return None

    parts = value.strip().split()
    if len(parts) == 1:
        # a lone scheme carries no credential
        return None if parts[0].lower() == BEARER_SCHEME else parts[0]
    if len(parts) == 2 and parts[0].lower() == BEARER_SCHEME:
        return parts[1]
    return None


# =============================================================================
# Identity resolution
# =============================================================================


@dataclass(frozen=True)
class IdentityResult:
    """Outcome of resolving a request's identity."""

    user_id: str | None = None
    error: Exception | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def failed(self) -> bool:
        """A credential was presented but did not verify."""
        return self.error is not None


class RequestIdentity:
    """
    Lazily verified, memoized identity for one request.

    Usage in resolvers:
        user_id = await identity.user_id()   # None if anonymous
        user_id = await identity.require()   # raises AuthenticationError
    """

    def __init__(
        self,
        token: str | None,
        tokens: TokenService,
        timeout: float | None = None,
    ):
        self.token = token
        self.tokens = tokens
        self.timeout = timeout
        self._task: asyncio.Task[IdentityResult] | None = None

    @classmethod
    def anonymous(cls, tokens: TokenService) -> RequestIdentity:
        return cls(None, tokens)

    @property
    def has_credential(self) -> bool:
        return self.token is not None

    @property
    def is_started(self) -> bool:
        """Has verification been kicked off yet?"""
        return self._task is not None

    async def resolve(self) -> IdentityResult:
        """Verify the token on first call; later calls share the result."""
        if self._task is None:
            self._task = asyncio.ensure_future(self._resolve())
        # one cancelled resolver must not cancel the shared verification
        return await asyncio.shield(self._task)

    async def user_id(self) -> str | None:
        return (await self.resolve()).user_id

    async def require(self) -> str:
        """The caller's user id, or AuthenticationError."""
        result = await self.resolve()
        if result.user_id is not None:
            return result.user_id
        if result.error is not None:
            raise AuthenticationError(str(result.error) or "Invalid token")
        raise AuthenticationError("You must be logged in")

    async def _resolve(self) -> IdentityResult:
        if self.token is None:
            return IdentityResult()

        try:
            if self.timeout is None:
                user_id = await self._verify()
            else:
                user_id = await asyncio.wait_for(self._verify(), self.timeout)
        except TokenError as e:
            logger.info(f"Token rejected, continuing as anonymous: {type(e).__name__}")
            return IdentityResult(error=e)
        except asyncio.TimeoutError:
            logger.warning("Token verification timed out, continuing as anonymous")
            return IdentityResult(error=AuthenticationError("Token verification timed out"))

        logger.info(f"Request authenticated as {user_id}")
        return IdentityResult(user_id=user_id)

    async def _verify(self) -> str:
        return self.tokens.verify(self.token)


# =============================================================================
# Per-request context handed to every resolver
# =============================================================================


class RequestContext(BaseContext):
    """Everything a resolver needs for one request."""

    def __init__(
        self,
        identity: RequestIdentity,
        teas: TeaService,
        accounts: AccountService,
    ):
        super().__init__()
        self.identity = identity
        self.teas = teas
        self.accounts = accounts
