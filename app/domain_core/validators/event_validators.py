"""
Domain validators for event-related business rules.
"""

from typing import Any, Dict, Optional

from app.domain_core.exceptions import BadRequestError, ValidationError
from app.domain_core.value_objects.coordinates import GeoFilter

REQUIRED_EVENT_FIELDS = ("title", "location", "date", "max_participants")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


class EventValidators:
    @staticmethod
    def validate_required_fields(payload: Dict[str, Any]) -> None:
        """Validate a creation payload carries every mandatory field."""
        missing = [name for name in REQUIRED_EVENT_FIELDS if _is_blank(payload.get(name))]
        if missing:
            raise ValidationError(
                "Missing required fields: title, location, date, maxParticipants."
            )
        EventValidators.validate_numbers(payload)

    @staticmethod
    def validate_update_fields(changes: Dict[str, Any]) -> None:
        """Required fields may be omitted from an update but never blanked."""
        blanked = [
            name
            for name in REQUIRED_EVENT_FIELDS
            if name in changes and _is_blank(changes[name])
        ]
        if blanked:
            raise ValidationError(f"Required fields cannot be empty: {', '.join(blanked)}")
        EventValidators.validate_numbers(changes)

    @staticmethod
    def validate_numbers(payload: Dict[str, Any]) -> None:
        max_participants = payload.get("max_participants")
        if max_participants is not None and max_participants < 1:
            raise ValidationError("maxParticipants must be a positive integer")

        fee = payload.get("fee")
        if fee is not None and fee < 0:
            raise ValidationError("fee cannot be negative")


def _parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise BadRequestError(f"{name} must be a number")
    if value != value or value in (float("inf"), float("-inf")):
        raise BadRequestError(f"{name} must be a finite number")
    return value


def parse_geo_filter(
    user_lat: Optional[str], user_lon: Optional[str], radius: Optional[str]
) -> Optional[GeoFilter]:
    """Build a radius filter from raw query strings.

    All three parameters must be present for the filter to apply; any
    present parameter must parse as a number regardless.
    """
    parsed = {}
    for name, raw in (("userLat", user_lat), ("userLon", user_lon), ("radius", radius)):
        if raw is None or raw == "":
            continue
        parsed[name] = _parse_float(name, raw)

    if len(parsed) < 3:
        return None

    if parsed["radius"] < 0:
        raise BadRequestError("radius cannot be negative")

    return GeoFilter(
        user_lat=parsed["userLat"],
        user_lon=parsed["userLon"],
        radius_km=parsed["radius"],
    )


def parse_user_point(user_lat: Optional[str], user_lon: Optional[str]) -> tuple[float, float]:
    """Parse the mandatory origin point of a road-distance request."""
    if user_lat in (None, "") or user_lon in (None, ""):
        raise BadRequestError(
            "User coordinates are required for road distance calculation."
        )
    return _parse_float("userLat", user_lat), _parse_float("userLon", user_lon)
