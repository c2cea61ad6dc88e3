"""
Tests for token issuance and verification.
"""

from datetime import timedelta

import jwt
import pytest

from steep.auth.tokens import (
    ExpiredToken,
    InvalidToken,
    TokenService,
    UnexpirableToken,
)
from steep.core.utils import utc_now

SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class Clock:
    """Settable clock."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return Clock(utc_now() - timedelta(days=8))


@pytest.fixture
def timed_tokens(settings, clock):
    return TokenService.from_settings(settings, clock=clock)


def claims(**overrides):
    now = utc_now()
    payload = {
        "sub": "u1",
        "iss": "steep",
        "aud": "steep-clients",
        "iat": now,
        "exp": now + timedelta(hours=1),
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


class TestIssue:
    def test_round_trip(self, tokens):
        assert tokens.verify(tokens.issue("u1")) == "u1"

    def test_claims(self, tokens):
        decoded = tokens.decode(tokens.issue("u1"))

        assert decoded.sub == "u1"
        assert decoded.iss == "steep"
        assert decoded.aud == "steep-clients"
        assert decoded.exp - decoded.iat == timedelta(days=7)

    def test_requires_secret(self):
        with pytest.raises(ValueError):
            TokenService("", issuer="steep", audience="steep-clients")


class TestExpiry:
    def test_valid_until_expiry(self, timed_tokens, clock):
        token = timed_tokens.issue("u1")
        clock.now += timedelta(days=6, hours=23)

        assert timed_tokens.verify(token) == "u1"

    def test_expired_after_a_week(self, timed_tokens, clock):
        token = timed_tokens.issue("u1")
        clock.now += timedelta(days=7, seconds=1)

        with pytest.raises(ExpiredToken):
            timed_tokens.verify(token)

    def test_expired_with_bad_signature_is_invalid(self, timed_tokens, clock):
        forged = jwt.encode(claims(exp=utc_now() - timedelta(days=1)), "another-secret-that-is-long-enough!!", algorithm="HS256")

        with pytest.raises(InvalidToken):
            timed_tokens.verify(forged)


class TestRejection:
    def test_missing_expiration(self, tokens):
        token = jwt.encode(claims(exp=None), SECRET, algorithm="HS256")

        with pytest.raises(UnexpirableToken):
            tokens.verify(token)

    def test_unexpirable_is_not_plain_invalid(self, tokens):
        token = jwt.encode(claims(exp=None), SECRET, algorithm="HS256")

        with pytest.raises(UnexpirableToken) as info:
            tokens.verify(token)
        assert not isinstance(info.value, InvalidToken)

    @pytest.mark.parametrize("overrides", [
        {"aud": "someone-else"},
        {"iss": "someone-else"},
        {"sub": None},
    ])
    def test_bad_claims(self, tokens, overrides):
        token = jwt.encode(claims(**overrides), SECRET, algorithm="HS256")

        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_wrong_secret(self, tokens):
        token = jwt.encode(claims(), "a-different-secret-that-is-long-enough", algorithm="HS256")

        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_other_algorithm(self, tokens):
        token = jwt.encode(claims(), SECRET, algorithm="HS512")

        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_garbage(self, tokens):
        with pytest.raises(InvalidToken):
            tokens.verify("not-a-token")
