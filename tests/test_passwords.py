"""
Tests for password hashing.
"""

import pytest

from steep.auth.passwords import PasswordCheck, PasswordHasher


def rounds_of(password_hash: str) -> int:
    return int(password_hash.split("$")[2])


class TestHashing:
    def test_same_password_hashes_differently(self, hasher):
        first = hasher.hash("hunter2")
        second = hasher.hash("hunter2")

        assert first != second
        assert hasher.verify("hunter2", first)
        assert hasher.verify("hunter2", second)

    def test_plaintext_not_in_hash(self, hasher):
        assert "hunter2" not in hasher.hash("hunter2")

    def test_cost_stays_in_range(self, hasher):
        for _ in range(6):
            assert 4 <= rounds_of(hasher.hash("pw")) <= 5

    def test_cost_is_randomized(self):
        hasher = PasswordHasher(4, 12)
        picks = {hasher.pick_rounds() for _ in range(200)}

        assert picks <= set(range(4, 13))
        assert len(picks) > 1

    @pytest.mark.parametrize("low,high", [(3, 5), (8, 6), (10, 32)])
    def test_rejects_bad_range(self, low, high):
        with pytest.raises(ValueError):
            PasswordHasher(low, high)


class TestChecking:
    def test_match(self, hasher):
        stored = hasher.hash("pw1")
        assert hasher.check("pw1", stored) is PasswordCheck.MATCH

    def test_mismatch(self, hasher):
        stored = hasher.hash("pw1")
        assert hasher.check("pw2", stored) is PasswordCheck.MISMATCH
        assert not hasher.verify("pw2", stored)

    def test_malformed_hash_is_a_fault_not_a_mismatch(self, hasher):
        assert hasher.check("pw1", "not-a-bcrypt-hash") is PasswordCheck.FAULT
        assert not hasher.verify("pw1", "not-a-bcrypt-hash")

    @pytest.mark.asyncio
    async def test_async_variants(self, hasher):
        stored = await hasher.hash_async("pw1")

        assert await hasher.check_async("pw1", stored) is PasswordCheck.MATCH
        assert await hasher.check_async("nope", stored) is PasswordCheck.MISMATCH
