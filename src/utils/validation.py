"""Validation utilities for location input and coordinates.

Small, self-contained helpers used across the application and tests.
"""

import math
from typing import Tuple

MAX_LOCATION_QUERY_LENGTH = 200


def validate_location_query(address: str) -> Tuple[bool, str]:
    """
    Validate a free-text address before it is sent to the geocoder.

    Args:
        address: Address or place name typed by the user

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not address or not address.strip():
        return False, "Address is required"

    cleaned = address.strip()
    if len(cleaned) < 3:
        return False, "Address must be at least 3 characters"
    if len(cleaned) > MAX_LOCATION_QUERY_LENGTH:
        return False, f"Address must be at most {MAX_LOCATION_QUERY_LENGTH} characters"
    if not any(ch.isalnum() for ch in cleaned):
        return False, "Address must contain letters or digits"

    return True, "Valid address"


def validate_coordinates(lat: float, lon: float) -> Tuple[bool, str]:
    """
    Validate latitude and longitude coordinates.

    Args:
        lat: Latitude value
        lon: Longitude value

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(lat, bool) or isinstance(lon, bool):
        return False, "Coordinates must be numeric"
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return False, "Coordinates must be numeric"

    if math.isnan(lat) or math.isnan(lon):
        return False, "Coordinates must not be NaN"

    if not (-90 <= lat <= 90):
        return False, "Latitude must be between -90 and 90"

    if not (-180 <= lon <= 180):
        return False, "Longitude must be between -180 and 180"

    return True, "Valid coordinates"


def validate_max_distance(max_distance) -> Tuple[bool, str]:
    if max_distance is None:
        return True, "No distance limit"
    if isinstance(max_distance, bool) or not isinstance(max_distance, (int, float)):
        return False, "Distance must be numeric"
    if math.isnan(max_distance) or max_distance <= 0:
        return False, "Distance must be a positive number of kilometers"
    return True, "Valid distance"
