"""
Credential Hasher

Argon2id hashing for passwords and refresh-token secrets alike, so a leaked
token-hash table resists offline brute force as well as the password table.
"""

import asyncio

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

# Process-wide cost parameters
MEMORY_COST_KIB = 19456
TIME_COST = 2
PARALLELISM = 1

_DUMMY_SECRET = "finance-auth-timing-equalizer"


class CredentialHasher:
    """
    Hashes and verifies secrets with fixed Argon2id parameters.

    hash() is salted (non-deterministic); verify() is deterministic.
    Both run in a worker thread so the event loop is not blocked.
    """

    def __init__(
        self,
        memory_cost: int = MEMORY_COST_KIB,
        time_cost: int = TIME_COST,
        parallelism: int = PARALLELISM,
    ):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        self._dummy_hash = self._hasher.hash(_DUMMY_SECRET)

    async def hash(self, secret: str) -> str:
        return await asyncio.to_thread(self._hasher.hash, secret)

    async def verify(self, secret_hash: str, secret: str) -> bool:
        return await asyncio.to_thread(self._verify, secret_hash, secret)

    async def verify_dummy(self, secret: str) -> bool:
        """Burn the same work as a real verify when there is nothing to verify against"""
        await self.verify(self._dummy_hash, secret)
        return False

    def _verify(self, secret_hash: str, secret: str) -> bool:
        try:
            return self._hasher.verify(secret_hash, secret)
        except (VerificationError, InvalidHashError):
            return False
