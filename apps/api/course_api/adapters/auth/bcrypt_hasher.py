"""bcrypt password hasher adapter."""

from __future__ import annotations

import base64
import hashlib

import bcrypt

from course_api.adapters.auth.base import PasswordHasher

DEFAULT_COST_FACTOR = 10


def _encode(plaintext: str) -> bytes:
    # bcrypt ignores input past 72 bytes; a base64 sha256 digest is 44 bytes with no NULs.
    digest = hashlib.sha256(plaintext.encode("utf-8")).digest()
    return base64.b64encode(digest)


class BcryptPasswordHasher(PasswordHasher):
    """Produces self-describing ``$2b$`` hashes with an embedded salt."""

    def __init__(self, rounds: int = DEFAULT_COST_FACTOR) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("ascii")

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("ascii"))
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False


__all__ = ["DEFAULT_COST_FACTOR", "BcryptPasswordHasher"]
