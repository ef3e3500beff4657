"""Opening-hours evaluation and formatting.

A provider is checked at the middle of an hour (``hour * 60 + 30``), so
filtering by a selected hour answers "is it plausibly open during this hour"
rather than testing the exact hour boundary. Interval ends are inclusive.
"""

from datetime import datetime
from typing import Any, Iterable, Optional, Sequence, Tuple

from src.data.models import OperationHour, WorkHour

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def current_day_hour(now: Optional[datetime] = None) -> Tuple[int, int]:
    """Return (weekday, hour) for the local wall clock with Monday=0."""
    now = now or datetime.now()
    return now.weekday(), now.hour


def resolve_check_time(
    day: Optional[int] = None, hour: Optional[int] = None, now: Optional[datetime] = None
) -> Tuple[int, int]:
    """Fill in whichever of day/hour is missing from the clock; returns (day, minute)."""
    current_day, current_hour = current_day_hour(now)
    check_day = current_day if day is None else day
    check_hour = current_hour if hour is None else hour
    return check_day, check_hour * 60 + 30


def work_hours_open_at(work_hours: Optional[Iterable[WorkHour]], check_day: int, check_minute: int) -> bool:
    if not work_hours:
        return False
    for block in work_hours:
        if check_day not in block.days:
            continue
        if any(op.contains(check_minute) for op in block.operation_hours):
            return True
    return False


def is_open_at(
    provider: Any, day: Optional[int] = None, hour: Optional[int] = None, now: Optional[datetime] = None
) -> bool:
    """Check whether a provider is open at the given day and hour.

    Args:
        provider: Provider row (pd.Series or mapping) with a "Work Hours" entry
        day: Day of week, 0 = Monday ... 6 = Sunday; defaults to today
        hour: Hour 0-23; defaults to the current hour
        now: Clock override used when day or hour is omitted

    Returns:
        True if any work-hour block covering the day has an interval that
        contains minute ``hour * 60 + 30``. Providers without work hours are
        never open.
    """
    check_day, check_minute = resolve_check_time(day, hour, now)
    return work_hours_open_at(provider.get("Work Hours"), check_day, check_minute)


def format_clock(minutes: Optional[int]) -> str:
    if minutes is None:
        return "--:--"
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_operation_hour(op: OperationHour) -> str:
    return f"{format_clock(op.start_minutes)} - {format_clock(op.end_minutes)}"


def format_work_hours(
    work_hours: Optional[Sequence[WorkHour]], day_names: Sequence[str] = DAY_NAMES, daily_label: str = "Daily"
) -> Optional[str]:
    """Render work hours for display.

    One block covering the whole week renders as ``"Daily: 08:00 - 17:00"``;
    otherwise blocks are joined with ``" | "``. Returns None when no hours are
    known.
    """
    if not work_hours:
        return None

    if len(work_hours) == 1 and len(work_hours[0].days) == 7:
        hours = ", ".join(format_operation_hour(op) for op in work_hours[0].operation_hours)
        return f"{daily_label}: {hours}"

    parts = []
    for block in work_hours:
        days = ", ".join(day_names[d] for d in block.days)
        hours = ", ".join(format_operation_hour(op) for op in block.operation_hours)
        parts.append(f"{days}: {hours}")
    return " | ".join(parts)
