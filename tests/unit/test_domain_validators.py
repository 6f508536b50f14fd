"""
Unit tests for event validators and query parsing.
"""

import pytest

from app.domain_core.exceptions import BadRequestError, ValidationError
from app.domain_core.validators.event_validators import (
    EventValidators,
    parse_geo_filter,
    parse_user_point,
)


VALID_PAYLOAD = {
    "title": "Meetup",
    "location": "Bengaluru",
    "date": "2030-05-01T18:00:00Z",
    "max_participants": 50,
}


@pytest.mark.unit
class TestEventValidators:
    def test_valid_payload_passes(self):
        EventValidators.validate_required_fields(dict(VALID_PAYLOAD))

    @pytest.mark.parametrize("missing", ["title", "location", "date", "max_participants"])
    def test_missing_required_field(self, missing):
        payload = dict(VALID_PAYLOAD)
        del payload[missing]

        with pytest.raises(ValidationError) as exc_info:
            EventValidators.validate_required_fields(payload)

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert "Missing required fields" in exc_info.value.message

    def test_whitespace_title_counts_as_missing(self):
        with pytest.raises(ValidationError):
            EventValidators.validate_required_fields({**VALID_PAYLOAD, "title": "   "})

    def test_update_may_omit_required_fields(self):
        EventValidators.validate_update_fields({"description": "New text"})

    def test_update_may_not_blank_required_fields(self):
        with pytest.raises(ValidationError, match="location"):
            EventValidators.validate_update_fields({"location": ""})

    def test_non_positive_capacity_rejected(self):
        with pytest.raises(ValidationError, match="maxParticipants"):
            EventValidators.validate_required_fields({**VALID_PAYLOAD, "max_participants": 0})

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError, match="fee"):
            EventValidators.validate_update_fields({"fee": -1.0})


@pytest.mark.unit
class TestParseGeoFilter:
    def test_all_three_present(self):
        geo_filter = parse_geo_filter("12.97", "77.59", "5")
        assert geo_filter.user_lat == 12.97
        assert geo_filter.user_lon == 77.59
        assert geo_filter.radius_km == 5.0

    def test_partial_parameters_disable_filter(self):
        assert parse_geo_filter("12.97", "77.59", None) is None
        assert parse_geo_filter(None, None, None) is None

    def test_malformed_number_rejected_even_when_incomplete(self):
        with pytest.raises(BadRequestError):
            parse_geo_filter("north", None, None)

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_non_finite_rejected(self, raw):
        with pytest.raises(BadRequestError):
            parse_geo_filter(raw, "77.59", "5")

    def test_negative_radius_rejected(self):
        with pytest.raises(BadRequestError):
            parse_geo_filter("12.97", "77.59", "-1")


@pytest.mark.unit
class TestParseUserPoint:
    def test_both_present(self):
        assert parse_user_point("12.97", "77.59") == (12.97, 77.59)

    def test_missing_coordinate(self):
        with pytest.raises(BadRequestError, match="User coordinates are required"):
            parse_user_point("12.97", None)

    def test_malformed_coordinate(self):
        with pytest.raises(BadRequestError):
            parse_user_point("12.97", "east")
