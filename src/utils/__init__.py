"""Utilities package for the Provider Directory.

Re-export the search, filtering and facet helpers used by the app and pages.
"""
# flake8: noqa: F401

from .distance import DISTANCE_COLUMN, calculate_distances, distance_km, has_valid_geo
from .facets import FacetOption, ServiceOption, build_facets, get_categories, get_cities, get_countries
from .facets import get_districts, get_provider_types, get_services
from .filters import FilterCriteria, filter_providers
from .hours import format_work_hours, is_open_at
from .io_utils import handle_streamlit_error, results_to_csv_bytes
from .localization import localized_value
from .search import search_providers
from .services import merge_services

__all__ = [
    "DISTANCE_COLUMN",
    "FacetOption",
    "FilterCriteria",
    "ServiceOption",
    "build_facets",
    "calculate_distances",
    "distance_km",
    "filter_providers",
    "format_work_hours",
    "get_categories",
    "get_cities",
    "get_countries",
    "get_districts",
    "get_provider_types",
    "get_services",
    "handle_streamlit_error",
    "has_valid_geo",
    "is_open_at",
    "localized_value",
    "merge_services",
    "results_to_csv_bytes",
    "search_providers",
]
