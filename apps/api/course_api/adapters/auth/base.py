"""Password hashing interfaces."""

from abc import ABC, abstractmethod

from starlette.concurrency import run_in_threadpool


class PasswordHasher(ABC):
    """One-way salted password hashing.

    Implementations are CPU bound; the async helpers run them on the worker
    thread pool so the event loop keeps serving other requests.
    """

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """Return a salted hash of ``plaintext``."""

    @abstractmethod
    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return whether ``plaintext`` matches ``hashed``."""

    async def hash_async(self, plaintext: str) -> str:
        return await run_in_threadpool(self.hash, plaintext)

    async def verify_async(self, plaintext: str, hashed: str) -> bool:
        return await run_in_threadpool(self.verify, plaintext, hashed)


__all__ = ["PasswordHasher"]
