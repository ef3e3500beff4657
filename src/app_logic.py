import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd
import streamlit as st

from src.data.ingestion import load_provider_data
from src.utils.config import get_dataset_config
from src.utils.distance import DISTANCE_COLUMN, calculate_distances, has_valid_geo
from src.utils.facets import dataset_facets, scoped_facets
from src.utils.filters import FilterCriteria, filter_providers
from src.utils.geocoding import geocode_address
from src.utils.hours import DAY_NAMES, format_work_hours, is_open_at
from src.utils.io_utils import build_map_search_url, format_phone_link, normalize_website_url
from src.utils.localization import FOREIGN_LANGUAGE, LOCAL_LANGUAGE, localized_value
from src.utils.search import search_providers
from src.utils.services import provider_services
from src.utils.validation import validate_coordinates, validate_location_query

logger = logging.getLogger(__name__)

__all__ = [
    "load_application_data",
    "run_query",
    "build_facets",
    "apply_user_location",
    "request_user_location",
    "clear_filters",
    "has_active_filters",
    "get_provider",
    "build_provider_detail",
]


def load_application_data() -> Tuple[pd.DataFrame, int]:
    """Load the configured provider dataset.

    The heavy lifting is cached by ``load_provider_data`` so every script run
    after the first reuses the same normalised DataFrame.

    Returns:
        Tuple[pd.DataFrame, int]: (provider_df, total)

    Raises:
        FileNotFoundError: If the configured dataset file is missing
        ValueError: If the dataset is not valid JSON (caught by calling code)
    """
    path = get_dataset_config()["path"]
    provider_df, total = load_provider_data(path)
    logger.info(f"Application data ready: {len(provider_df)} of {total} providers from {path}")
    return provider_df, total


@st.cache_data(ttl=3600, show_spinner=False)
def _cached_dataset_facets(path: str, _provider_df: pd.DataFrame) -> Dict[str, list]:
    logger.info(f"Building dataset facets for {path}")
    return dataset_facets(_provider_df)


def build_facets(provider_df: pd.DataFrame, criteria: FilterCriteria) -> Dict[str, list]:
    """Facet lists for the current criteria.

    Countries, categories, provider types and services are cached per
    configured dataset. Cities and districts are rebuilt for the selected
    country and city on every run.
    """
    facets = dict(_cached_dataset_facets(get_dataset_config()["path"], provider_df))
    facets.update(scoped_facets(provider_df, criteria))
    return facets


def run_query(
    provider_df: pd.DataFrame,
    query: Optional[str],
    criteria: FilterCriteria,
    now: Optional[datetime] = None,
) -> pd.DataFrame:
    """Run the complete search workflow for the current query and criteria.

    This orchestrates the core pipeline:
    1. Free-text search over the full dataset
    2. Structured filtering of the search result
    3. Distance from the user location for providers with a location
    4. Stable sort by distance when a user location is known

    Args:
        provider_df: Full provider dataset
        query: Free-text search string; empty or None matches everything
        criteria: Current filter selections
        now: Clock override for the work day/hour fallback

    Returns:
        pd.DataFrame: Matching providers with a ``Distance (km)`` column.
            Without a user location the column is NaN and dataset order is
            kept; with one, providers without a distance come last in their
            original relative order.
    """
    results = search_providers(provider_df, query)
    results = filter_providers(results, criteria, now=now)

    if criteria.user_location is None or results.empty:
        results[DISTANCE_COLUMN] = np.nan
        return results

    user_lat, user_lon = criteria.user_location
    distances = calculate_distances(user_lat, user_lon, results)
    results[DISTANCE_COLUMN] = pd.Series(
        [np.nan if d is None else d for d in distances], index=results.index, dtype=float
    )
    results = results.sort_values(DISTANCE_COLUMN, kind="stable", na_position="last")
    logger.debug(f"Query {query!r} returned {len(results)} providers sorted by distance")
    return results


def apply_user_location(criteria: FilterCriteria, coords: Optional[Tuple[float, float]]) -> FilterCriteria:
    """Return criteria carrying the acquired user location.

    A missing or invalid location clears the distance criterion as well, so a
    maximum distance never outlives the location it was measured from.
    """
    if coords is not None:
        is_valid, message = validate_coordinates(*coords)
        if is_valid:
            return replace(criteria, user_location=(float(coords[0]), float(coords[1])))
        logger.warning(f"Ignoring user location {coords}: {message}")
    return replace(criteria, user_location=None, max_distance=None)


def request_user_location(criteria: FilterCriteria, address: str) -> Tuple[FilterCriteria, Optional[str]]:
    """Geocode an address and apply it as the user location.

    Returns:
        Tuple of (new criteria, error message or None)
    """
    is_valid, message = validate_location_query(address)
    if not is_valid:
        return apply_user_location(criteria, None), message

    coords = geocode_address(address)
    if coords is None:
        logger.warning(f"Could not resolve user location from '{address}'; distance filter cleared")
        return apply_user_location(criteria, None), f"Could not find a location for '{address.strip()}'"
    return apply_user_location(criteria, coords), None


def clear_filters(criteria: FilterCriteria) -> FilterCriteria:
    """Reset every filter selection; the user location is kept."""
    return FilterCriteria(user_location=criteria.user_location)


def has_active_filters(query: Optional[str], criteria: FilterCriteria) -> bool:
    return bool(query) or bool(criteria.active_fields())


def get_provider(provider_df: pd.DataFrame, provider_id: Any) -> Optional[pd.Series]:
    if provider_id is None or provider_df.empty:
        return None
    matches = provider_df[provider_df["ID"] == str(provider_id)]
    if matches.empty:
        return None
    return matches.iloc[0]


def _first_remark(provider: pd.Series, language: str) -> Optional[str]:
    remarks = provider.get("Remarks") or ()
    if not remarks:
        return None
    remark = remarks[0]
    if language == FOREIGN_LANGUAGE and remark.english_content:
        return remark.english_content
    return remark.content or None


def build_provider_detail(
    provider: pd.Series, language: str = LOCAL_LANGUAGE, now: Optional[datetime] = None
) -> Dict[str, Any]:
    """Display projection of one provider for the detail view.

    Localised fields fall back to the local value when the English one is
    missing. The map link is only present for providers with a usable location.
    """
    name = localized_value(provider, "Name", language)
    other_language = LOCAL_LANGUAGE if language == FOREIGN_LANGUAGE else FOREIGN_LANGUAGE
    secondary_name = localized_value(provider, "Name", other_language)

    services = [
        (s.name or s.local_name) if language == FOREIGN_LANGUAGE else (s.local_name or s.name)
        for s in provider_services(provider)
    ]

    lat, lon = provider.get("Latitude"), provider.get("Longitude")
    phones = list(provider.get("Phone Numbers") or ())

    return {
        "id": provider.get("ID"),
        "name": name,
        "secondary_name": secondary_name if secondary_name != name else None,
        "category": provider.get("Category") or None,
        "provider_type": provider.get("Provider Type") or None,
        "services": [s for s in services if s],
        "work_hours": format_work_hours(provider.get("Work Hours"), day_names=DAY_NAMES),
        "open_now": is_open_at(provider, now=now),
        "address": localized_value(provider, "Address", language) or None,
        "district": localized_value(provider, "District", language) or None,
        "city": localized_value(provider, "City", language) or None,
        "country": localized_value(provider, "Country Name", language) or provider.get("Country") or None,
        "map_url": build_map_search_url(lat, lon) if has_valid_geo(lat, lon) else None,
        "phones": [(phone, format_phone_link(phone)) for phone in phones],
        "website": normalize_website_url(provider.get("Website")),
        "network_member": bool(provider.get("Network Member")),
        "active": bool(provider.get("Active")),
        "temporary_deposit": bool(provider.get("Temporary Deposit")),
        "remark": _first_remark(provider, language),
    }
