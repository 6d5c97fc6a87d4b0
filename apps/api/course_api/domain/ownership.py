"""Ownership authorization rule."""

from course_api.errors import OwnershipViolation
from course_api.schemas.auth import AuthPrincipal


def is_owner(principal: AuthPrincipal, owner_id: int) -> bool:
    return principal.user_id == owner_id


def ensure_owner(principal: AuthPrincipal, owner_id: int) -> None:
    """Raise ``OwnershipViolation`` unless the principal owns the resource."""
    if not is_owner(principal, owner_id):
        raise OwnershipViolation()
