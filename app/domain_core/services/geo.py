"""
Great-circle distance and in-memory radius filtering.
"""

from math import asin, cos, radians, sin, sqrt
from typing import Iterable, List

from app.domain_core.entities.event import Event
from app.domain_core.value_objects.coordinates import GeoFilter

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Straight-line distance in kilometres between two WGS84 points."""
    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)
    a = (
        sin(d_lat / 2) ** 2
        + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    )
    # min() guards asin against rounding just above 1.0
    return 2 * EARTH_RADIUS_KM * asin(min(1.0, sqrt(a)))


def within_radius(event: Event, geo_filter: GeoFilter) -> bool:
    """Events without both coordinates never match."""
    if event.location_lat is None or event.location_lon is None:
        return False
    distance = haversine_km(
        geo_filter.user_lat,
        geo_filter.user_lon,
        event.location_lat,
        event.location_lon,
    )
    return distance <= geo_filter.radius_km


def filter_by_radius(events: Iterable[Event], geo_filter: GeoFilter) -> List[Event]:
    return [event for event in events if within_radius(event, geo_filter)]
