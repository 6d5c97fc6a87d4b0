"""Password hashing adapters."""

from .base import PasswordHasher
from .bcrypt_hasher import DEFAULT_COST_FACTOR, BcryptPasswordHasher

__all__ = [
    "DEFAULT_COST_FACTOR",
    "BcryptPasswordHasher",
    "PasswordHasher",
]
