"""Tests for the geopy-backed location provider.

The Nominatim lookup is replaced with monkeypatch so no network access is needed.
"""
from types import SimpleNamespace

import pytest
from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable

from src.utils import geocoding

pytestmark = pytest.mark.usefixtures("clear_geocode_cache")


def test_returns_coordinates(monkeypatch):
    seen = []

    def fake_lookup(address):
        seen.append(address)
        return SimpleNamespace(latitude=21.0285, longitude=105.8542)

    monkeypatch.setattr(geocoding, "_lookup", fake_lookup)

    assert geocoding.geocode_address("  Hoàn Kiếm, Hà Nội ") == (21.0285, 105.8542)
    assert seen == ["Hoàn Kiếm, Hà Nội"]


def test_no_match_returns_none(monkeypatch):
    monkeypatch.setattr(geocoding, "_lookup", lambda address: None)
    assert geocoding.geocode_address("Nowhere Street 999") is None


@pytest.mark.parametrize(
    "error",
    [GeocoderTimedOut("slow"), GeocoderUnavailable("down"), GeocoderServiceError("bad request")],
)
def test_service_failures_return_none(monkeypatch, error):
    def failing_lookup(address):
        raise error

    monkeypatch.setattr(geocoding, "_lookup", failing_lookup)
    assert geocoding.geocode_address(f"Failing address {type(error).__name__}") is None


def test_blank_address_skips_lookup(monkeypatch):
    def unexpected(address):
        raise AssertionError("lookup should not run")

    monkeypatch.setattr(geocoding, "_lookup", unexpected)
    assert geocoding.geocode_address("") is None
    assert geocoding.geocode_address("   ") is None


def test_rate_limited_geocoder_uses_configuration(monkeypatch):
    created = {}

    class FakeNominatim:
        def __init__(self, user_agent, timeout):
            created["user_agent"] = user_agent
            created["timeout"] = timeout

        def geocode(self, address):
            return None

    monkeypatch.setattr(geocoding, "Nominatim", FakeNominatim)
    monkeypatch.setattr(geocoding, "_RATE_LIMITED_GEOCODER", None)

    limiter = geocoding._get_rate_limited_geocoder()

    assert created == {"user_agent": "provider_directory", "timeout": 10}
    assert geocoding._get_rate_limited_geocoder() is limiter
