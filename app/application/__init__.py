"""
Application layer - Use cases and business orchestration.

This package contains the use cases that orchestrate domain entities,
repositories and external providers to serve the HTTP API.
"""

from .use_cases.create_event import CreateEventUseCase
from .use_cases.update_event import UpdateEventUseCase
from .use_cases.delete_event import DeleteEventUseCase
from .unit_of_work import UnitOfWork

__all__ = [
    "CreateEventUseCase",
    "UpdateEventUseCase",
    "DeleteEventUseCase",
    "UnitOfWork",
]
