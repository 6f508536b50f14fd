"""
Geographic value objects.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude pair; both None means the location is unknown."""

    lat: Optional[float] = None
    lon: Optional[float] = None

    @classmethod
    def unknown(cls) -> "Coordinates":
        return cls(None, None)

    @property
    def is_known(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class RoadDistance:
    """Road distance in kilometres plus the provider's human-readable duration."""

    distance_km: Optional[float] = None
    duration_text: Optional[str] = None

    @classmethod
    def unknown(cls) -> "RoadDistance":
        return cls(None, None)

    @property
    def is_known(self) -> bool:
        return self.distance_km is not None


@dataclass(frozen=True)
class GeoFilter:
    """Radius filter around a user point."""

    user_lat: float
    user_lon: float
    radius_km: float
