"""
Password hashing

bcrypt hashes carry their own cost factor and salt, so raising the cost only
affects new hashes; existing hashes keep verifying. Hashing is CPU-bound and
runs in a worker thread so request handling on the event loop continues.
"""

import asyncio

import bcrypt

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes and current releases reject longer input
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        # Compared against when there is no stored hash, so a miss costs
        # about as much as a hit
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def _hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def _verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._verify, password, password_hash)

    async def burn(self, password: str) -> None:
        """Spend one verification's worth of time without a real hash"""
        await asyncio.to_thread(self._verify, password, self._dummy_hash.decode("utf-8"))
