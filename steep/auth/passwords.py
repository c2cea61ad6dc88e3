"""
Password hashing.

Uses bcrypt, which salts automatically and embeds its cost in the hash
("$2b$<rounds>$..."). Every new hash draws its cost from the configured
range, so two hashes of the same password differ in both salt and cost
and both still verify.

Passwords are truncated to 72 bytes (bcrypt's limit).
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from enum import Enum

import bcrypt

from steep.config import Settings

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


class PasswordCheck(str, Enum):
    """Outcome of comparing a password against a stored hash."""

    MATCH = "match"
    MISMATCH = "mismatch"
    FAULT = "fault"  # the comparison could not complete


class PasswordHasher:
    """bcrypt hashing with a randomized work factor."""

    def __init__(self, min_rounds: int, max_rounds: int):
        if not 4 <= min_rounds <= max_rounds <= 31:
            raise ValueError(f"Invalid bcrypt rounds range: {min_rounds}..{max_rounds}")
        self.min_rounds = min_rounds
        self.max_rounds = max_rounds

    @classmethod
    def from_settings(cls, settings: Settings) -> PasswordHasher:
        return cls(settings.bcrypt_min_rounds, settings.bcrypt_max_rounds)

    def pick_rounds(self) -> int:
        return self.min_rounds + secrets.randbelow(self.max_rounds - self.min_rounds + 1)

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.pick_rounds())
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def check(self, password: str, password_hash: str) -> PasswordCheck:
        """
        Compare a password with a stored hash.

        A malformed hash (or any other failure inside bcrypt) is a FAULT,
        never a MATCH.
        """
        try:
            matched = bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Password comparison failed: {type(e).__name__}")
            return PasswordCheck.FAULT
        return PasswordCheck.MATCH if matched else PasswordCheck.MISMATCH

    def verify(self, password: str, password_hash: str) -> bool:
        return self.check(password, password_hash) is PasswordCheck.MATCH

    # bcrypt is CPU-bound; keep it off the event loop

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def check_async(self, password: str, password_hash: str) -> PasswordCheck:
        return await asyncio.to_thread(self.check, password, password_hash)


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]
