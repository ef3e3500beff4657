"""Location provider: resolve a typed address to the user's coordinates."""
import logging
from typing import Any, Optional, Tuple

import streamlit as st
from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from src.utils.config import get_geocoding_config

logger = logging.getLogger(__name__)

_RATE_LIMITED_GEOCODER = None


def _get_rate_limited_geocoder():
    global _RATE_LIMITED_GEOCODER
    if _RATE_LIMITED_GEOCODER is not None:
        return _RATE_LIMITED_GEOCODER

    config = get_geocoding_config()
    geolocator = Nominatim(user_agent=config["nominatim_user_agent"], timeout=config["request_timeout"])
    _RATE_LIMITED_GEOCODER = RateLimiter(
        geolocator.geocode,
        min_delay_seconds=config["rate_limit_delay"],
        max_retries=config["max_retries"],
        swallow_exceptions=False,
    )
    return _RATE_LIMITED_GEOCODER


def _lookup(address: str) -> Optional[Any]:
    geocode_fn = _get_rate_limited_geocoder()
    return geocode_fn(address)


@st.cache_data(ttl=3600, show_spinner=False)
def geocode_address(address: str) -> Optional[Tuple[float, float]]:
    """Return (latitude, longitude) for an address, or None if it cannot be resolved.

    Service failures are logged and reported as None so callers can treat
    "not found" and "lookup failed" the same way.
    """
    if not address or not address.strip():
        return None
    try:
        location = _lookup(address.strip())
    except (GeocoderTimedOut, GeocoderUnavailable, GeocoderServiceError) as e:
        logger.warning(f"Geocoding failed for '{address}': {type(e).__name__}: {e}")
        return None
    if location is None:
        logger.info(f"No geocoding match for '{address}'")
        return None
    return float(location.latitude), float(location.longitude)
