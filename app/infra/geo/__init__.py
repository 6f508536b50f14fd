"""Geocoding and routing provider clients."""

from .geocoder import OpenCageGeocoder
from .distance_matrix import GoogleDistanceMatrixClient

__all__ = ["OpenCageGeocoder", "GoogleDistanceMatrixClient"]
