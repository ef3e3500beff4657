"""Service collection helpers shared by search, filtering, facets and detail views."""
from typing import Any, Iterable, List, Optional

from src.data.models import Service


def merge_services(*collections: Optional[Iterable[Service]]) -> List[Service]:
    """Union of service collections keyed by id.

    The first occurrence fixes the position, the last occurrence wins for the
    value. Missing collections are treated as empty.
    """
    merged = {}
    for collection in collections:
        for service in collection or ():
            merged[service.id] = service
    return list(merged.values())


def provider_services(provider: Any) -> List[Service]:
    """All services of a provider row, deduplicated across both collections."""
    return merge_services(provider.get("Services"), provider.get("Applied Benefit Services"))
