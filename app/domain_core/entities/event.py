"""
Event domain entity with core business rules.
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, Optional
from uuid import UUID
from datetime import datetime, UTC

from app.domain_core.value_objects.coordinates import Coordinates

# Fields an update payload may never touch.
IMMUTABLE_FIELDS = frozenset({"id", "owner_id", "created_at", "version"})


@dataclass
class Event:
    id: UUID
    owner_id: UUID
    title: str
    location: str
    date: datetime
    max_participants: int
    description: str = ""
    last_registration_date: Optional[datetime] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    fee: float = 0.0
    image_url: Optional[str] = None
    instagram_link: Optional[str] = None
    website_link: Optional[str] = None
    registration_link: Optional[str] = None
    current_participants: int = 0
    location_lat: Optional[float] = None
    location_lon: Optional[float] = None
    version: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: Optional[datetime] = None

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.location_lat, self.location_lon)

    def is_owned_by(self, user_id: UUID) -> bool:
        """Business rule: ownership is a typed identifier comparison."""
        return self.owner_id == user_id

    def relocate(self, location: str, coordinates: Coordinates) -> None:
        """Business rule: a new location text always replaces the coordinates.

        Null coordinates overwrite the old pair so they never describe a
        different place than ``location``.
        """
        self.location = location
        self.location_lat = coordinates.lat
        self.location_lon = coordinates.lon

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        """Copy mutable fields from ``changes`` onto the entity."""
        known = {f.name for f in fields(self)}
        for name, value in changes.items():
            if name in IMMUTABLE_FIELDS or name not in known:
                continue
            setattr(self, name, value)

    def touch(self) -> None:
        """Business rule: every persisted update bumps version and timestamp."""
        self.version += 1
        self.updated_at = datetime.now(UTC)

    def snapshot(self) -> Dict[str, Any]:
        """JSON-safe copy of the full record for archival."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, UUID):
                data[key] = str(value)
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
        return data
