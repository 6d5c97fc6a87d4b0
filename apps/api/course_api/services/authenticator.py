"""Basic-auth authenticator."""

from __future__ import annotations

import logging

from course_api.adapters.auth import PasswordHasher
from course_api.core.logging_safety import safe_log_identifier
from course_api.errors import AuthFailureReason, AuthenticationFailed, storage_guard
from course_api.repositories.base import Store, UserRecord
from course_api.schemas.auth import AuthPrincipal, Credentials

logger = logging.getLogger(__name__)


class Authenticator:
    """Resolves request credentials to a principal.

    Outcomes:

    - no credentials: rejected with ``missing_header``
    - unknown identifier: rejected with ``principal_not_found``
    - wrong secret: rejected with ``secret_mismatch``
    - otherwise the matching user is returned as an ``AuthPrincipal``

    Every rejection surfaces to the client as the same 401 body; only the log
    line records which check failed. Nothing is cached between requests.
    """

    def __init__(self, store: Store, hasher: PasswordHasher) -> None:
        self._store = store
        self._hasher = hasher

    async def authenticate(self, credentials: Credentials | None, *, header_present: bool = False) -> AuthPrincipal:
        if credentials is None:
            if header_present:
                raise self._reject("malformed_header", "Auth header is malformed", identifier=None)
            raise self._reject("missing_header", "Auth header not found", identifier=None)

        with storage_guard("authenticate.find_user"):
            user = await self._store.find_one(UserRecord, email_address=credentials.identifier)
        if user is None:
            raise self._reject(
                "principal_not_found",
                f"User not found for username: {credentials.identifier}",
                identifier=credentials.identifier,
            )

        if not await self._hasher.verify_async(credentials.secret, user.password):
            raise self._reject(
                "secret_mismatch",
                f"Authentication failure for user: {credentials.identifier}",
                identifier=credentials.identifier,
            )

        logger.info(
            "auth.accepted principal_id=%s identifier=%s",
            user.id,
            safe_log_identifier(credentials.identifier, prefix="uid"),
        )
        return AuthPrincipal(
            user_id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email_address=user.email_address,
        )

    @staticmethod
    def _reject(reason: AuthFailureReason, detail: str, *, identifier: str | None) -> AuthenticationFailed:
        logger.warning(
            "auth.rejected reason=%s identifier=%s",
            reason,
            safe_log_identifier(identifier, prefix="uid"),
        )
        return AuthenticationFailed(reason, detail)
