"""
Ownership and authentication guards.
"""

from typing import Optional
from uuid import UUID

from app.domain_core.exceptions import ForbiddenError, UnauthorizedError


def require_authenticated(caller_id: Optional[UUID]) -> UUID:
    """Return the caller identity or fail with Unauthorized."""
    if caller_id is None:
        raise UnauthorizedError()
    return caller_id


def require_owner(caller_id: Optional[UUID], owner_id: UUID) -> None:
    """Fail with Forbidden unless the caller owns the resource."""
    caller_id = require_authenticated(caller_id)
    if caller_id != owner_id:
        raise ForbiddenError()
