"""Structured provider filtering.

``FilterCriteria`` holds one query's worth of filter selections. It is frozen:
callers build a new instance for every change, and the ``with_country`` /
``with_city`` helpers clear the dependent location selections so a city or
district never outlives the parent it was chosen under.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Optional, Tuple

import pandas as pd

from src.utils.distance import calculate_distances
from src.utils.hours import resolve_check_time, work_hours_open_at
from src.utils.services import merge_services

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterCriteria:
    """Filter selections; ``None`` means no constraint."""

    country: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    category: Optional[str] = None
    provider_type: Optional[str] = None
    service_id: Optional[int] = None
    work_day: Optional[int] = None  # 0-6 (Monday-Sunday)
    work_hour: Optional[int] = None  # 0-23
    user_location: Optional[Tuple[float, float]] = None
    max_distance: Optional[float] = None  # km

    def with_country(self, country: Optional[str]) -> "FilterCriteria":
        return replace(self, country=country or None, city=None, district=None)

    def with_city(self, city: Optional[str]) -> "FilterCriteria":
        return replace(self, city=city or None, district=None)

    def with_district(self, district: Optional[str]) -> "FilterCriteria":
        return replace(self, district=district or None)

    def update(self, **changes) -> "FilterCriteria":
        return replace(self, **changes)

    @property
    def distance_filter_active(self) -> bool:
        return self.user_location is not None and self.max_distance is not None

    def active_fields(self) -> list[str]:
        """Names of populated criteria, excluding the user location itself."""
        return [f.name for f in fields(self) if f.name != "user_location" and getattr(self, f.name) is not None]


def _collection(provider_df: pd.DataFrame, column: str):
    if column in provider_df.columns:
        return provider_df[column]
    return [()] * len(provider_df)


def _exact_mask(provider_df: pd.DataFrame, column: str, value: str) -> pd.Series:
    if column not in provider_df.columns:
        return pd.Series(False, index=provider_df.index)
    return provider_df[column].fillna("") == value


def filter_providers(
    provider_df: pd.DataFrame, criteria: FilterCriteria, now: Optional[datetime] = None
) -> pd.DataFrame:
    """Apply every populated criterion (logical AND) to the providers.

    Country matches case-insensitively; city, district, category and provider
    type match exactly. A service matches when its id appears in either
    service collection. Work day/hour are evaluated together: when only one is
    given, the other comes from the current clock (``now``). The distance
    filter needs both a user location and a maximum distance, and always
    excludes providers without a usable location.

    Args:
        provider_df: Provider DataFrame
        criteria: Filter selections
        now: Clock override for the work day/hour fallback

    Returns:
        pd.DataFrame: Matching providers, original order preserved
    """
    if provider_df is None or provider_df.empty:
        return provider_df.copy() if provider_df is not None else pd.DataFrame()

    mask = pd.Series(True, index=provider_df.index)

    if criteria.country:
        if "Country" in provider_df.columns:
            mask &= provider_df["Country"].fillna("").str.lower() == criteria.country.lower()
        else:
            mask &= False

    for column, value in (
        ("City", criteria.city),
        ("District", criteria.district),
        ("Category", criteria.category),
        ("Provider Type", criteria.provider_type),
    ):
        if value:
            mask &= _exact_mask(provider_df, column, value)

    if criteria.service_id is not None:
        service_mask = [
            any(s.id == criteria.service_id for s in merge_services(services, applied))
            for services, applied in zip(
                _collection(provider_df, "Services"), _collection(provider_df, "Applied Benefit Services")
            )
        ]
        mask &= pd.Series(service_mask, index=provider_df.index, dtype=bool)

    if criteria.work_day is not None or criteria.work_hour is not None:
        check_day, check_minute = resolve_check_time(criteria.work_day, criteria.work_hour, now)
        open_mask = [
            work_hours_open_at(wh, check_day, check_minute) for wh in _collection(provider_df, "Work Hours")
        ]
        mask &= pd.Series(open_mask, index=provider_df.index, dtype=bool)

    if criteria.distance_filter_active:
        user_lat, user_lon = criteria.user_location
        distances = calculate_distances(user_lat, user_lon, provider_df)
        in_range = [d is not None and d <= criteria.max_distance for d in distances]
        mask &= pd.Series(in_range, index=provider_df.index, dtype=bool)

    filtered = provider_df[mask].copy()
    logger.debug(f"Filtered {len(provider_df)} providers to {len(filtered)} with {criteria.active_fields()}")
    return filtered
