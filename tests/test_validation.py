"""Test suite for validation utilities.

Tests verify location query, coordinate and distance validation.
"""
import pytest

from src.utils.validation import validate_coordinates, validate_location_query, validate_max_distance


class TestValidateLocationQuery:
    """Tests for the address typed before geocoding."""

    def test_valid_address(self):
        valid, msg = validate_location_query("78 Giải Phóng, Hà Nội")
        assert valid is True
        assert msg == "Valid address"

    @pytest.mark.parametrize("address", ["", "   ", None])
    def test_missing_address(self, address):
        valid, msg = validate_location_query(address)
        assert valid is False
        assert msg == "Address is required"

    def test_too_short(self):
        valid, msg = validate_location_query(" a ")
        assert valid is False
        assert "at least 3" in msg

    def test_too_long(self):
        valid, msg = validate_location_query("x" * 201)
        assert valid is False
        assert "at most 200" in msg

    def test_punctuation_only(self):
        valid, msg = validate_location_query("---,,,")
        assert valid is False
        assert "letters or digits" in msg


class TestValidateCoordinates:
    """Tests for coordinate validation."""

    def test_valid_coordinates(self):
        valid, msg = validate_coordinates(21.0285, 105.8542)
        assert valid is True
        assert msg == "Valid coordinates"

    def test_boundaries_are_valid(self):
        assert validate_coordinates(90, 180)[0] is True
        assert validate_coordinates(-90, -180)[0] is True

    def test_latitude_out_of_range(self):
        valid, msg = validate_coordinates(91.0, 105.0)
        assert valid is False
        assert "Latitude must be between -90 and 90" in msg

    def test_longitude_out_of_range(self):
        valid, msg = validate_coordinates(21.0, -181.0)
        assert valid is False
        assert "Longitude must be between -180 and 180" in msg

    @pytest.mark.parametrize("lat, lon", [("21.0", 105.0), (None, 105.0), (True, 105.0)])
    def test_non_numeric(self, lat, lon):
        valid, msg = validate_coordinates(lat, lon)
        assert valid is False
        assert msg == "Coordinates must be numeric"

    def test_nan(self):
        assert validate_coordinates(float("nan"), 105.0)[0] is False


class TestValidateMaxDistance:
    def test_none_means_no_limit(self):
        assert validate_max_distance(None) == (True, "No distance limit")

    @pytest.mark.parametrize("value", [2, 5.5, 50])
    def test_positive(self, value):
        assert validate_max_distance(value)[0] is True

    @pytest.mark.parametrize("value", [0, -1, float("nan"), "5", True])
    def test_invalid(self, value):
        assert validate_max_distance(value)[0] is False
