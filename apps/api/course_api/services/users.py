"""User service layer."""

from __future__ import annotations

import logging

from course_api.adapters.auth import PasswordHasher
from course_api.core.logging_safety import safe_log_identifier
from course_api.errors import DuplicateEmail, storage_guard
from course_api.repositories.base import Store, UniqueConstraintError, UserRecord
from course_api.schemas.auth import AuthPrincipal
from course_api.schemas.user import CreateUserRequest, User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: Store, hasher: PasswordHasher) -> None:
        self._store = store
        self._hasher = hasher

    @staticmethod
    def current_user(principal: AuthPrincipal) -> User:
        return User(
            id=principal.user_id,
            first_name=principal.first_name,
            last_name=principal.last_name,
            email_address=principal.email_address,
        )

    async def create_user(self, payload: CreateUserRequest) -> User:
        safe_email = safe_log_identifier(payload.email_address, prefix="uid")
        with storage_guard("users.find_by_email"):
            existing = await self._store.find_one(UserRecord, email_address=payload.email_address)
        if existing is not None:
            logger.warning("users.signup_rejected identifier=%s reason=duplicate_email", safe_email)
            raise DuplicateEmail(payload.email_address)

        hashed = await self._hasher.hash_async(payload.password)
        with storage_guard("users.create"):
            try:
                record = await self._store.create(
                    UserRecord,
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    email_address=payload.email_address,
                    password=hashed,
                )
            except UniqueConstraintError as exc:
                # Lost a race with a concurrent signup for the same address.
                logger.warning("users.signup_rejected identifier=%s reason=duplicate_email", safe_email)
                raise DuplicateEmail(payload.email_address) from exc

        logger.info("users.created user_id=%s identifier=%s", record.id, safe_email)
        return to_user(record)


def to_user(record: UserRecord) -> User:
    return User(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        email_address=record.email_address,
    )
