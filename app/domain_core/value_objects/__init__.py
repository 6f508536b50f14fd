"""Domain value objects exports."""

from .coordinates import Coordinates, RoadDistance, GeoFilter

__all__ = ["Coordinates", "RoadDistance", "GeoFilter"]
