"""
Account operations: login, signup and the caller's own profile.

A wrong password is a normal negative outcome, not an error, so callers
cannot tell which half of the credential was wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from steep.auth.context import RequestIdentity
from steep.auth.passwords import PasswordCheck, PasswordHasher
from steep.auth.tokens import TokenService
from steep.core.models import UserRecord
from steep.errors import AuthenticationError, ValidationError
from steep.storage.base import Collections, DocumentStore

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


class AuthStatus(str, Enum):
    ISSUED = "issued"
    ALREADY_AUTHENTICATED = "already_authenticated"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class AuthOutcome:
    """Result of login/signup. ``token`` is set only when one was issued."""

    status: AuthStatus
    message: str
    token: str | None = None

    @classmethod
    def issued(cls, token: str, message: str) -> AuthOutcome:
        return cls(AuthStatus.ISSUED, message, token)


ALREADY_LOGGED_IN = AuthOutcome(AuthStatus.ALREADY_AUTHENTICATED, "Already logged in")
VERIFY_CREDENTIALS = AuthOutcome(AuthStatus.INVALID_CREDENTIALS, "Please verify your credentials")


class AccountService:
    """Login, signup and profile lookups against the users collection."""

    def __init__(self, store: DocumentStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def get_user(self, user_id: str) -> UserRecord | None:
        document = await self.store.get(Collections.USERS, user_id)
        return UserRecord.from_document(document) if document is not None else None

    async def login(self, identity: RequestIdentity, user_id: str, password: str) -> AuthOutcome:
        try:
            current = await identity.user_id()
        except Exception as e:
            logger.exception("Identity check failed during login")
            raise AuthenticationError("Login auth error") from e

        if current is not None:
            logger.info(f"Login skipped, request already authenticated as {current}")
            return ALREADY_LOGGED_IN

        user = await self.get_user(user_id)
        if user is None:
            raise ValidationError("User ID not found")

        check = await self.hasher.check_async(password, user.password_hash)
        if check is PasswordCheck.MATCH:
            logger.info(f"User {user.id} logged in")
            return AuthOutcome.issued(self.tokens.issue(user.id), "Logged in")

        if check is PasswordCheck.FAULT:
            logger.warning(f"Stored password hash for {user.id} could not be checked")
        else:
            logger.info(f"Failed login for {user.id}")
        return VERIFY_CREDENTIALS

    async def signup(
        self,
        identity: RequestIdentity,
        user_id: str,
        password: str,
        email: str,
        picture: str | None = None,
    ) -> AuthOutcome:
        if await identity.user_id() is not None:
            raise AuthenticationError("Already logged in")

        if not user_id:
            raise ValidationError("User ID is required")
        try:
            email = _email_adapter.validate_python(email)
        except PydanticValidationError:
            raise ValidationError("Invalid email") from None

        # No compare-and-set: two concurrent signups for one id can both pass
        # this check, and the later write wins.
        if await self.store.get(Collections.USERS, user_id) is not None:
            raise ValidationError("User already exists")

        document = {
            "email": email,
            "passwordHash": await self.hasher.hash_async(password),
        }
        if picture:
            document["picture"] = picture
        await self.store.set(Collections.USERS, user_id, document)

        logger.info(f"User {user_id} signed up")
        return AuthOutcome.issued(self.tokens.issue(user_id), "Signed up")

    async def me(self, identity: RequestIdentity) -> UserRecord | None:
        user_id = await identity.user_id()
        if user_id is None:
            return None
        return await self.get_user(user_id)
