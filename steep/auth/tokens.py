# =============================================================================
# JWT Token Service
# =============================================================================
#
# Issues and verifies the bearer tokens handed out by login and signup:
#   - HS256 (or the one configured algorithm), nothing else is accepted
#   - fixed issuer and audience
#   - mandatory expiration, one week after issuance
#
# There is no revocation: a token stops being valid only when it expires.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from pydantic import BaseModel

from steep.config import Settings
from steep.core.utils import utc_now

REQUIRED_CLAIMS = ["exp", "iat", "sub", "iss", "aud"]


# =============================================================================
# Errors
# =============================================================================


class TokenError(Exception):
    """Base exception for token errors."""


class InvalidToken(TokenError):
    """Signature, algorithm or claims do not check out."""


class ExpiredToken(TokenError):
    """Token verified but its expiration has passed."""


class UnexpirableToken(TokenError):
    """Token carries no expiration claim."""


# =============================================================================
# Models
# =============================================================================


class TokenClaims(BaseModel):
    """Validated JWT claims."""

    sub: str
    iss: str
    aud: str
    iat: datetime
    exp: datetime


# =============================================================================
# Service
# =============================================================================


class TokenService:
    """Signs and verifies identity tokens."""

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self.secret_key = secret_key
        self.issuer = issuer
        self.audience = audience
        self.algorithm = algorithm
        self.lifetime = lifetime
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> TokenService:
        return cls(
            secret_key=settings.jwt_secret_key,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(days=settings.jwt_expire_days),
            **kwargs,
        )

    def issue(self, subject: str) -> str:
        """Create a signed token for ``subject``."""
        now = self.clock()
        payload = {
            "sub": subject,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises:
            UnexpirableToken: no ``exp`` claim (even with a valid signature)
            ExpiredToken: valid token past its expiration
            InvalidToken: anything else
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": REQUIRED_CLAIMS, "verify_exp": False},
            )
        except jwt.MissingRequiredClaimError as e:
            if e.claim == "exp":
                raise UnexpirableToken("Token has no expiration") from e
            raise InvalidToken(f"Invalid token: {e}") from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}") from e

        try:
            claims = TokenClaims(
                sub=payload["sub"],
                iss=payload["iss"],
                aud=payload["aud"],
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidToken(f"Invalid token claims: {e}") from e

        if self.clock() >= claims.exp:
            raise ExpiredToken("Token has expired")
        return claims

    def verify(self, token: str) -> str:
        """Return the subject of a valid token."""
        return self.decode(token).sub
