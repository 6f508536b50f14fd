"""Application use cases - one class per user-facing operation."""

from .create_event import CreateEventUseCase
from .update_event import UpdateEventUseCase
from .delete_event import DeleteEventUseCase, DELETE_NOT_FOUND_MESSAGE
from .query_events import GetEventUseCase, ListEventsUseCase
from .road_distance import RoadDistanceUseCase
from .identity import GetUserUseCase, SyncIdentityUseCase
from .verification import (
    DocumentUpload,
    GetVerificationDocumentUseCase,
    SubmitVerificationUseCase,
)
from .created_events import ListCreatedEventsUseCase, RebuildCreatedEventsUseCase

__all__ = [
    "CreateEventUseCase",
    "UpdateEventUseCase",
    "DeleteEventUseCase",
    "DELETE_NOT_FOUND_MESSAGE",
    "GetEventUseCase",
    "ListEventsUseCase",
    "RoadDistanceUseCase",
    "GetUserUseCase",
    "SyncIdentityUseCase",
    "DocumentUpload",
    "SubmitVerificationUseCase",
    "GetVerificationDocumentUseCase",
    "ListCreatedEventsUseCase",
    "RebuildCreatedEventsUseCase",
]
