"""Free-text search over provider rows."""
import re

import pandas as pd

from src.utils.services import provider_services

SEARCH_COLUMNS = [
    "Name",
    "English Name",
    "Address",
    "English Address",
    "City",
    "English City",
    "District",
    "English District",
    "Category",
    "Provider Type",
]

_NON_DIGITS = re.compile(r"\D")


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def _phone_matches(phones, digits: str) -> bool:
    return any(digits in digits_only(phone) for phone in phones or ())


def _service_matches(provider: pd.Series, lowered: str) -> bool:
    return any(
        lowered in service.name.lower() or lowered in service.local_name.lower()
        for service in provider_services(provider)
    )


def search_providers(provider_df: pd.DataFrame, query: str) -> pd.DataFrame:
    """Filter providers matching a free-text query.

    Matching is a case-insensitive substring test against names, addresses,
    city, district, category and provider type, plus service names from both
    service collections. When the query contains digits they are also matched
    against phone numbers with all formatting stripped, so "0912" finds
    "091-234-5678".

    Args:
        provider_df: Provider DataFrame
        query: Search text; empty or None returns every provider

    Returns:
        pd.DataFrame: Matching providers in their original order
    """
    if not query or provider_df.empty:
        return provider_df.copy()

    lowered = query.lower()
    digits = digits_only(query)

    mask = pd.Series(False, index=provider_df.index)
    for col in SEARCH_COLUMNS:
        if col in provider_df.columns:
            values = provider_df[col].fillna("").astype(str).str.lower()
            mask |= values.str.contains(lowered, regex=False)

    if digits and "Phone Numbers" in provider_df.columns:
        mask |= provider_df["Phone Numbers"].apply(lambda phones: _phone_matches(phones, digits)).astype(bool)

    remaining = ~mask
    if remaining.any():
        service_hits = provider_df[remaining].apply(lambda row: _service_matches(row, lowered), axis=1)
        mask.loc[service_hits[service_hits.astype(bool)].index] = True

    return provider_df[mask].copy()
