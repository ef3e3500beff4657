"""Facet option lists for progressive filter narrowing.

Facets are derived from the full dataset (or a parent-scoped slice of it),
never from the current result set: they describe what else can be selected,
not what matches the filters applied right now. Districts depend strictly on
a selected city and are empty until one is chosen.

Options carry both labels, but ordering always follows the local-language
label so switching the display language never reorders a list.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

from src.utils.localization import FOREIGN_LANGUAGE, LOCAL_LANGUAGE, capitalize_first, collation_key
from src.utils.services import merge_services


@dataclass(frozen=True)
class FacetOption:
    value: str
    label: str
    foreign_label: str

    def display(self, language: str = LOCAL_LANGUAGE) -> str:
        return self.foreign_label if language == FOREIGN_LANGUAGE else self.label


@dataclass(frozen=True)
class ServiceOption:
    id: int
    name: str
    foreign_name: str

    def display(self, language: str = LOCAL_LANGUAGE) -> str:
        return self.foreign_name if language == FOREIGN_LANGUAGE else self.name


def _sorted_options(options: List[FacetOption]) -> List[FacetOption]:
    return sorted(options, key=lambda o: collation_key(o.label))


def _unique_options(provider_df: pd.DataFrame, column: str, foreign_column: str) -> List[FacetOption]:
    options = []
    seen = set()
    for _, row in provider_df.iterrows():
        value = row.get(column) or ""
        if not value or value in seen:
            continue
        seen.add(value)
        options.append(FacetOption(value=value, label=value, foreign_label=row.get(foreign_column) or value))
    return options


def _unique_values(provider_df: pd.DataFrame, column: str) -> List[str]:
    if provider_df.empty or column not in provider_df.columns:
        return []
    values = provider_df[column].dropna().astype(str)
    return sorted(v for v in values.unique() if v)


def get_countries(provider_df: pd.DataFrame) -> List[FacetOption]:
    """Unique countries across the whole dataset, compared case-insensitively."""
    options = []
    seen = set()
    for _, row in provider_df.iterrows():
        value = row.get("Country") or ""
        key = value.lower()
        if not value or key in seen:
            continue
        seen.add(key)
        label = capitalize_first(value)
        foreign = row.get("Country English Name") or ""
        options.append(
            FacetOption(value=value, label=label, foreign_label=capitalize_first(foreign) if foreign else label)
        )
    return _sorted_options(options)


def get_cities(provider_df: pd.DataFrame, country: Optional[str] = None) -> List[FacetOption]:
    """Cities within the selected country, or across the dataset when none is selected."""
    scoped = provider_df
    if country:
        scoped = provider_df[provider_df["Country"].fillna("").str.lower() == country.lower()]
    return _sorted_options(_unique_options(scoped, "City", "English City"))


def get_districts(provider_df: pd.DataFrame, city: Optional[str] = None) -> List[FacetOption]:
    """Districts within the selected city; empty until a city is chosen."""
    if not city:
        return []
    scoped = provider_df[provider_df["City"] == city]
    return _sorted_options(_unique_options(scoped, "District", "English District"))


def get_categories(provider_df: pd.DataFrame) -> List[str]:
    return _unique_values(provider_df, "Category")


def get_provider_types(provider_df: pd.DataFrame) -> List[str]:
    return _unique_values(provider_df, "Provider Type")


def get_services(provider_df: pd.DataFrame) -> List[ServiceOption]:
    """Every distinct service (by id) offered anywhere in the dataset."""
    if provider_df.empty:
        return []
    services = merge_services(
        *(
            merge_services(services, applied)
            for services, applied in zip(provider_df["Services"], provider_df["Applied Benefit Services"])
        )
    )
    # Id 0 is a selectable service; only a missing id is left out
    options = [
        ServiceOption(
            id=s.id,
            name=s.local_name or s.name,
            foreign_name=s.name or s.local_name,
        )
        for s in services
        if s.id is not None
    ]
    return sorted(options, key=lambda o: collation_key(o.name))


def dataset_facets(provider_df: pd.DataFrame) -> Dict[str, list]:
    """Facet lists that do not depend on any selection."""
    return {
        "countries": get_countries(provider_df),
        "categories": get_categories(provider_df),
        "provider_types": get_provider_types(provider_df),
        "services": get_services(provider_df),
    }


def scoped_facets(provider_df: pd.DataFrame, criteria) -> Dict[str, list]:
    """Facet lists narrowed by the selected country and city."""
    return {
        "cities": get_cities(provider_df, criteria.country),
        "districts": get_districts(provider_df, criteria.city),
    }


def build_facets(provider_df: pd.DataFrame, criteria) -> Dict[str, list]:
    """All facet lists for the current criteria, keyed by facet name."""
    facets = dataset_facets(provider_df)
    facets.update(scoped_facets(provider_df, criteria))
    return facets
