"""
Event input/output schemas for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.domain_core.entities.event import Event
from .base import CamelModel


# ---------- EVENT REQUEST SCHEMAS ----------
class EventFields(CamelModel):
    """
    Writable event fields.

    Everything is optional at the schema level; required-field rules are
    enforced by the domain so that a missing field yields the domain's 400.
    """

    title: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=500)
    date: Optional[datetime] = None
    last_registration_date: Optional[datetime] = None
    category: Optional[str] = Field(None, max_length=100)
    sub_category: Optional[str] = Field(None, max_length=100)
    fee: Optional[float] = None
    image_url: Optional[str] = None
    instagram_link: Optional[str] = None
    website_link: Optional[str] = None
    registration_link: Optional[str] = None
    max_participants: Optional[int] = None

    @field_validator("date", "last_registration_date")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Offset-less input is taken as UTC
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class CreateEventRequest(EventFields):
    """Request to publish a new event. The owner is always the caller."""

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class UpdateEventRequest(EventFields):
    """Partial update; only the fields present in the body are applied."""

    current_participants: Optional[int] = Field(None, ge=0)
    version: Optional[int] = Field(
        None, ge=1, description="Version the client last read; 409 if stale"
    )

    def to_changes(self) -> Dict[str, Any]:
        changes = self.model_dump(exclude_unset=True)
        changes.pop("version", None)
        return changes


class DeleteEventRequest(CamelModel):
    reason: Optional[str] = Field(None, max_length=1000)


# ---------- EVENT RESPONSE SCHEMAS ----------
class EventResponse(CamelModel):
    id: UUID
    owner_id: UUID
    title: str
    description: str = ""
    location: str
    date: datetime
    last_registration_date: Optional[datetime] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    fee: float = 0.0
    image_url: Optional[str] = None
    instagram_link: Optional[str] = None
    website_link: Optional[str] = None
    registration_link: Optional[str] = None
    max_participants: int
    current_participants: int = 0
    location_lat: Optional[float] = None
    location_lon: Optional[float] = None
    version: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id,
            owner_id=event.owner_id,
            title=event.title,
            description=event.description,
            location=event.location,
            date=event.date,
            last_registration_date=event.last_registration_date,
            category=event.category,
            sub_category=event.sub_category,
            fee=event.fee,
            image_url=event.image_url,
            instagram_link=event.instagram_link,
            website_link=event.website_link,
            registration_link=event.registration_link,
            max_participants=event.max_participants,
            current_participants=event.current_participants,
            location_lat=event.location_lat,
            location_lon=event.location_lon,
            version=event.version,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )


class RoadDistanceResponse(CamelModel):
    distance: float = Field(..., description="Driving distance in kilometres")
    duration: str = Field(..., description="Provider's human-readable duration")


class DeleteEventResponse(CamelModel):
    message: str
    archive_id: UUID
