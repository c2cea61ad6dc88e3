"""
FastAPI application.

Serves the GraphQL API at /graphql. A fresh RequestContext is built for
every request from its ``authorization`` header.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from strawberry.fastapi import GraphQLRouter

from steep.api.schema import schema
from steep.auth import PasswordHasher, RequestContext, RequestIdentity, TokenService, extract_bearer_token
from steep.config import Settings, get_settings
from steep.integrations.sentry import init_sentry
from steep.logs import configure_logging
from steep.services import AccountService, TeaService
from steep.storage import DocumentStore, create_store

logger = logging.getLogger(__name__)


# =============================================================================
# Context
# =============================================================================


async def get_context(request: Request) -> RequestContext:
    """Per-request context; the token is verified only if a resolver asks."""
    state = request.app.state
    token = extract_bearer_token(request.headers)
    if token is None:
        logger.info("Anonymous request (no credential)")
    identity = RequestIdentity(
        token,
        state.tokens,
        timeout=state.settings.identity_timeout_seconds,
    )
    return RequestContext(identity=identity, teas=state.teas, accounts=state.accounts)


# =============================================================================
# App Setup
# =============================================================================


def create_app(settings: Settings | None = None, store: DocumentStore | None = None) -> FastAPI:
    """Build the API. Settings are read once here and passed down explicitly."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        init_sentry(settings)
        logger.info(f"Steep API starting in {settings.environment} mode")
        yield
        logger.info("Steep API shutting down")

    app = FastAPI(
        title="Steep API",
        description="Track teas and brews",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    if store is None:
        store = create_store(settings)
    hasher = PasswordHasher.from_settings(settings)
    tokens = TokenService.from_settings(settings)

    app.state.settings = settings
    app.state.store = store
    app.state.tokens = tokens
    app.state.teas = TeaService(store)
    app.state.accounts = AccountService(store, hasher, tokens)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    graphql_app = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.debug else None,
    )
    app.include_router(graphql_app, prefix="/graphql")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "steep-api"}

    return app


app = create_app()
