"""Domain validators exports."""

from .event_validators import EventValidators, parse_geo_filter, parse_user_point

__all__ = ["EventValidators", "parse_geo_filter", "parse_user_point"]
