"""
API schemas package.
"""

from .base import CamelModel, ErrorResponse, HealthResponse, MessageResponse
from .event_io import (
    CreateEventRequest,
    UpdateEventRequest,
    DeleteEventRequest,
    EventResponse,
    RoadDistanceResponse,
    DeleteEventResponse,
)
from .user_io import (
    UserResponse,
    VerificationResponse,
    VerificationSubmissionResponse,
    CreatedEventsResponse,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "CreateEventRequest",
    "UpdateEventRequest",
    "DeleteEventRequest",
    "EventResponse",
    "RoadDistanceResponse",
    "DeleteEventResponse",
    "UserResponse",
    "VerificationResponse",
    "VerificationSubmissionResponse",
    "CreatedEventsResponse",
]
