"""Password Hasher — bcrypt implementation of the PasswordHasher protocol.

Invariants:
    - hash() output is a bcrypt digest string ($2b$...), never the plaintext
    - verify() never raises on a malformed digest: returns False

Design Decisions:
    - bcrypt work runs in a worker thread (asyncio.to_thread): the event loop keeps
      serving requests while a digest is computed
    - rounds configurable: tests use the bcrypt minimum (4) for speed
"""

import asyncio

import bcrypt


class BcryptPasswordHasher:
    """One-way password digests with per-password salt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def _hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify_sync(plaintext: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            return False

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._hash_sync, plaintext)

    async def verify(self, plaintext: str, digest: str) -> bool:
        return await asyncio.to_thread(self._verify_sync, plaintext, digest)
