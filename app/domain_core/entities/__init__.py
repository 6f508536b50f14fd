"""Domain entities exports."""

from .event import Event
from .deleted_event import DeletedEvent, DEFAULT_DELETION_REASON
from .user import User, IdentityProfile, VerificationDetails

__all__ = [
    "Event",
    "DeletedEvent",
    "DEFAULT_DELETION_REASON",
    "User",
    "IdentityProfile",
    "VerificationDetails",
]
