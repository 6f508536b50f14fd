"""
Application ports - abstract interfaces for external dependencies.

These interfaces define the contracts that the application layer needs
from external systems, following the Dependency Inversion Principle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence
from uuid import UUID

from app.domain_core.entities.event import Event
from app.domain_core.entities.deleted_event import DeletedEvent
from app.domain_core.entities.user import IdentityProfile, User
from app.domain_core.value_objects.coordinates import Coordinates, RoadDistance


class EventRepositoryPort(ABC):
    """Abstract repository interface for Event operations."""

    @abstractmethod
    async def create(self, event: Event) -> Event:
        """Create a new event."""
        pass

    @abstractmethod
    async def get_by_id(self, event_id: UUID) -> Optional[Event]:
        """Get event by ID."""
        pass

    @abstractmethod
    async def get_owned(self, event_id: UUID, owner_id: UUID) -> Optional[Event]:
        """Get event by ID, only if owned by ``owner_id``."""
        pass

    @abstractmethod
    async def update(self, event: Event, expected_version: Optional[int] = None) -> bool:
        """Update an existing event; False if nothing was written."""
        pass

    @abstractmethod
    async def delete_owned(self, event_id: UUID, owner_id: UUID) -> bool:
        """Delete an event, only if owned by ``owner_id``."""
        pass

    @abstractmethod
    async def list_ids_by_owner(self, owner_id: UUID) -> List[UUID]:
        """Ids of all events owned by ``owner_id``."""
        pass


class DeletedEventRepositoryPort(ABC):
    """Append-only archive of deleted events."""

    @abstractmethod
    async def archive(self, record: DeletedEvent) -> UUID:
        """Store an archive record and return its id."""
        pass

    @abstractmethod
    async def get_by_original_event_id(self, event_id: UUID) -> Optional[DeletedEvent]:
        """Look up the archive record of a deleted event."""
        pass


class UserRepositoryPort(ABC):
    """Abstract repository interface for User operations."""

    @abstractmethod
    async def create(self, user: User) -> User:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_external_id(self, external_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def update_profile(self, user: User) -> User:
        pass

    @abstractmethod
    async def save_verification(self, user: User) -> bool:
        pass

    @abstractmethod
    async def append_created_event(self, user_id: UUID, event_id: UUID) -> None:
        pass

    @abstractmethod
    async def remove_created_event(self, user_id: UUID, event_id: UUID) -> None:
        pass

    @abstractmethod
    async def list_created_events(self, user_id: UUID) -> List[UUID]:
        pass

    @abstractmethod
    async def replace_created_events(
        self, user_id: UUID, event_ids: Sequence[UUID]
    ) -> None:
        pass


class GeocoderPort(ABC):
    """Resolves free-text locations. Never raises; unknown coordinates on failure."""

    @abstractmethod
    async def geocode(self, location_text: str) -> Coordinates:
        pass


class RoadDistancePort(ABC):
    """Road distance between two points. Never raises; unknown result on failure."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        pass

    @abstractmethod
    async def road_distance(
        self, origin_lat: float, origin_lon: float, dest_lat: float, dest_lon: float
    ) -> RoadDistance:
        pass


@dataclass(frozen=True)
class StoredDocument:
    name: str
    content_type: str
    content: bytes


class DocumentStoragePort(ABC):
    """Durable storage for uploaded verification documents."""

    @abstractmethod
    async def store(
        self, owner_id: UUID, filename: str, content_type: str, content: bytes
    ) -> str:
        """Store a document and return its durable URL."""
        pass

    @abstractmethod
    async def load(self, name: str) -> Optional[StoredDocument]:
        """Read a stored document back by its name; None if unknown."""
        pass


class IdentityProviderPort(ABC):
    """External OAuth identity provider."""

    @abstractmethod
    def authorization_url(self, state: str) -> str:
        pass

    @abstractmethod
    async def fetch_profile(self, code: str) -> IdentityProfile:
        """Exchange an authorization code for the caller's profile."""
        pass
