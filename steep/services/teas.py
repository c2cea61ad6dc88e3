"""
Tea and brew operations.

Visibility rules:
- public teas are listed for anyone
- an owner lists all of their own teas, public or not
- brews are listed for any existing tea, with no ownership check
"""

from __future__ import annotations

import logging

from steep.auth.context import RequestIdentity
from steep.core.models import Brew, Tea, TeaType
from steep.errors import AuthenticationError, ValidationError
from steep.storage.base import Collections, DocumentStore

logger = logging.getLogger(__name__)


class TeaService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def public_teas(self) -> list[Tea]:
        documents = await self.store.query(Collections.TEAS, "isPublic", True)
        return [Tea.from_document(document) for document in documents]

    async def user_teas(self, identity: RequestIdentity) -> list[Tea]:
        """Every tea the caller owns."""
        try:
            user_id = await identity.require()
        except AuthenticationError:
            raise
        except Exception as e:
            logger.exception("Identity check failed while listing teas")
            raise AuthenticationError("You are not logged in") from e

        if await self.store.get(Collections.USERS, user_id) is None:
            raise ValidationError("User ID not found")

        documents = await self.store.query(Collections.TEAS, "userId", user_id)
        return [Tea.from_document(document) for document in documents]

    async def tea_brews(self, tea_id: str) -> list[Brew]:
        # TODO: decide whether brews of private teas should be owner-only
        if await self.store.get(Collections.TEAS, tea_id) is None:
            raise ValidationError("Tea ID not found")

        documents = await self.store.query(Collections.BREWS, "teaId", tea_id)
        return [Brew.from_document(document) for document in documents]

    async def post_tea(
        self,
        identity: RequestIdentity,
        brand: str,
        name: str,
        type: str,
        is_public: bool | None = None,
    ) -> Tea | None:
        """
        Create a tea owned by the caller.

        Returns None for callers that sent no credential; they cannot post.
        A credential that fails to verify is an AuthenticationError.
        """
        try:
            result = await identity.resolve()
        except Exception as e:
            logger.exception("Identity check failed while posting a tea")
            raise AuthenticationError("You are not logged in") from e

        if result.failed:
            raise AuthenticationError("You are not logged in")
        if result.user_id is None:
            logger.info("Anonymous caller tried to post a tea")
            return None
        user_id = result.user_id

        draft = Tea(
            id="",
            brand=brand,
            name=name,
            type=TeaType.parse(type),
            is_public=bool(is_public),
            user_id=user_id,
        )
        tea_id = await self.store.add(Collections.TEAS, draft.to_document())

        # Not rolled back if this re-read fails
        created = await self.store.get(Collections.TEAS, tea_id)
        if created is None:
            raise ValidationError("Tea ID not found")

        logger.info(f"User {user_id} created tea {tea_id}")
        return Tea.from_document(created)
