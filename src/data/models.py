"""Value types stored inside the provider DataFrame.

Nested collections (services, work hours, remarks) are kept as tuples of
frozen dataclasses in object columns so a loaded dataset can be shared
between queries without risk of mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Service:
    """A service offered by a provider, keyed by ``id`` for deduplication."""

    id: Optional[int]
    name: str = ""
    local_name: str = ""
    remark: Optional[str] = None


@dataclass(frozen=True)
class OperationHour:
    """An opening interval expressed in minutes since midnight.

    ``None`` bounds mean the stored timestamp could not be parsed; such an
    interval never contains any instant.
    """

    start_minutes: Optional[int]
    end_minutes: Optional[int]

    def contains(self, minute: int) -> bool:
        if self.start_minutes is None or self.end_minutes is None:
            return False
        return self.start_minutes <= minute <= self.end_minutes


@dataclass(frozen=True)
class WorkHour:
    """Weekdays (0=Monday ... 6=Sunday) sharing the same opening intervals."""

    days: Tuple[int, ...] = ()
    operation_hours: Tuple[OperationHour, ...] = ()


@dataclass(frozen=True)
class Remark:
    type: str = ""
    content: str = ""
    english_content: str = ""


@dataclass(frozen=True)
class DatasetSummary:
    """Row counts reported after normalising a raw dataset."""

    total: int
    loaded: int
    skipped: int = 0
    duplicate_ids: Tuple[str, ...] = ()
    missing_geo: int = 0
    warnings: Tuple[str, ...] = field(default_factory=tuple)
