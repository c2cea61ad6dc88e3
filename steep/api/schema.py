"""
GraphQL schema.

Resolvers stay thin: they pull the request context off ``info`` and hand
off to the services, which own every authorization decision.
"""

from typing import Optional

import strawberry
from strawberry.types import Info

from steep.auth.context import RequestContext
from steep.core.models import Brew, Tea, UserRecord
from steep.services.accounts import AuthOutcome


# =============================================================================
# Types
# =============================================================================


@strawberry.type(name="Tea")
class TeaNode:
    id: strawberry.ID
    brand: str
    name: str
    type: str
    is_public: bool
    rating: float
    user_id: strawberry.ID

    @classmethod
    def from_model(cls, tea: Tea) -> "TeaNode":
        return cls(
            id=strawberry.ID(tea.id),
            brand=tea.brand,
            name=tea.name,
            type=tea.type.value,
            is_public=tea.is_public,
            rating=tea.rating,
            user_id=strawberry.ID(tea.user_id),
        )


@strawberry.type(name="Brew")
class BrewNode:
    id: strawberry.ID
    timestamp: str
    temperature: int
    dose: float
    time: int
    rating: float
    notes: str
    tea_id: strawberry.ID

    @classmethod
    def from_model(cls, brew: Brew) -> "BrewNode":
        return cls(
            id=strawberry.ID(brew.id),
            timestamp=brew.timestamp,
            temperature=brew.temperature,
            dose=brew.dose,
            time=brew.time,
            rating=brew.rating,
            notes=brew.notes,
            tea_id=strawberry.ID(brew.tea_id),
        )


@strawberry.type(name="User")
class UserNode:
    id: strawberry.ID
    email: str
    picture: Optional[str] = None

    @classmethod
    def from_model(cls, user: UserRecord) -> "UserNode":
        return cls(id=strawberry.ID(user.id), email=user.email, picture=user.picture)


@strawberry.type
class AuthPayload:
    """Login/signup result. ``token`` is null unless one was issued."""

    token: Optional[str]
    message: str

    @classmethod
    def from_outcome(cls, outcome: AuthOutcome) -> "AuthPayload":
        return cls(token=outcome.token, message=outcome.message)


# =============================================================================
# Operations
# =============================================================================


@strawberry.type
class Query:
    @strawberry.field
    async def public_teas(self, info: Info[RequestContext, None]) -> list[TeaNode]:
        teas = await info.context.teas.public_teas()
        return [TeaNode.from_model(tea) for tea in teas]

    @strawberry.field
    async def user_teas(self, info: Info[RequestContext, None]) -> list[TeaNode]:
        ctx = info.context
        teas = await ctx.teas.user_teas(ctx.identity)
        return [TeaNode.from_model(tea) for tea in teas]

    @strawberry.field
    async def tea_brews(self, info: Info[RequestContext, None], id: strawberry.ID) -> list[BrewNode]:
        brews = await info.context.teas.tea_brews(str(id))
        return [BrewNode.from_model(brew) for brew in brews]

    @strawberry.field
    async def me(self, info: Info[RequestContext, None]) -> Optional[UserNode]:
        ctx = info.context
        user = await ctx.accounts.me(ctx.identity)
        return UserNode.from_model(user) if user is not None else None


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def login(
        self,
        info: Info[RequestContext, None],
        id: strawberry.ID,
        password: str,
    ) -> AuthPayload:
        ctx = info.context
        outcome = await ctx.accounts.login(ctx.identity, str(id), password)
        return AuthPayload.from_outcome(outcome)

    @strawberry.mutation
    async def signup(
        self,
        info: Info[RequestContext, None],
        id: strawberry.ID,
        password: str,
        email: str,
        picture: Optional[str] = None,
    ) -> AuthPayload:
        ctx = info.context
        outcome = await ctx.accounts.signup(ctx.identity, str(id), password, email, picture)
        return AuthPayload.from_outcome(outcome)

    @strawberry.mutation
    async def post_tea(
        self,
        info: Info[RequestContext, None],
        brand: str,
        name: str,
        type: str,
        is_public: Optional[bool] = None,
    ) -> Optional[TeaNode]:
        """Null when the caller is anonymous."""
        ctx = info.context
        tea = await ctx.teas.post_tea(ctx.identity, brand, name, type, is_public)
        return TeaNode.from_model(tea) if tea is not None else None


schema = strawberry.Schema(query=Query, mutation=Mutation)
