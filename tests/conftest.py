"""
Shared fixtures.

Everything runs against the in-memory store with a cheap bcrypt cost range
so hashing stays fast.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from steep.auth import PasswordHasher, RequestIdentity, TokenService
from steep.config import Settings
from steep.services import AccountService, TeaService
from steep.storage import Collections, InMemoryDocumentStore

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        environment="test",
        debug=False,
        jwt_secret_key=TEST_SECRET,
        bcrypt_min_rounds=4,
        bcrypt_max_rounds=5,
        sentry_dsn="",
    )


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def hasher(settings):
    return PasswordHasher.from_settings(settings)


@pytest.fixture
def tokens(settings):
    return TokenService.from_settings(settings)


@pytest.fixture
def teas(store):
    return TeaService(store)


@pytest.fixture
def accounts(store, hasher, tokens):
    return AccountService(store, hasher, tokens)


@pytest.fixture
def anonymous(tokens):
    return RequestIdentity.anonymous(tokens)


@pytest.fixture
def identity_for(tokens):
    """Build a request identity carrying a freshly issued token."""

    def make(user_id: str) -> RequestIdentity:
        return RequestIdentity(tokens.issue(user_id), tokens)

    return make


@pytest_asyncio.fixture
async def user_u1(store, hasher):
    """User u1 with password pw1."""
    await store.set(Collections.USERS, "u1", {
        "email": "u1@example.com",
        "passwordHash": hasher.hash("pw1"),
    })
    return "u1"


@pytest_asyncio.fixture
async def client(settings, store):
    """HTTP client over the ASGI app, sharing the test store."""
    from steep.api.app import create_app

    app = create_app(settings, store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
