"""Domain services exports."""

from .geo import EARTH_RADIUS_KM, filter_by_radius, haversine_km, within_radius
from .ownership import require_authenticated, require_owner

__all__ = [
    "EARTH_RADIUS_KM",
    "filter_by_radius",
    "haversine_km",
    "within_radius",
    "require_authenticated",
    "require_owner",
]
