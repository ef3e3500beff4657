"""Utilities for normalising raw provider records into the directory DataFrame."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from src.data.models import DatasetSummary, OperationHour, Remark, Service, WorkHour

logger = logging.getLogger(__name__)

# Raw JSON key -> DataFrame column for plain text fields
TEXT_COLUMN_MAPPING = {
    "lisaCode": "Code",
    "name": "Name",
    "engName": "English Name",
    "category": "Category",
    "providerType": "Provider Type",
    "website": "Website",
    "address": "Address",
    "engAddress": "English Address",
    "city": "City",
    "engCity": "English City",
    "district": "District",
    "engDistrict": "English District",
    "country": "Country",
    "countryName": "Country Name",
    "countryEngName": "Country English Name",
    "countryCode": "Country Code",
    "preferredClinic": "Preferred Clinic",
}

FLAG_COLUMN_MAPPING = {
    "active": "Active",
    "fHVINetwork": "Network Member",
    "isSTP": "STP",
    "temporaryDeposit": "Temporary Deposit",
}

PROVIDER_COLUMNS = (
    ["ID"]
    + list(TEXT_COLUMN_MAPPING.values())
    + [
        "Phone Numbers",
        "Services",
        "Applied Benefit Services",
        "Work Hours",
        "Latitude",
        "Longitude",
    ]
    + list(FLAG_COLUMN_MAPPING.values())
    + ["Remarks"]
)


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and np.isnan(value):
        return ""
    return str(value).strip()


def _clean_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    if value is None:
        return False
    return bool(value)


def _clean_coordinate(value: Any, limit: float) -> float:
    """Coerce a coordinate to float; anything unusable becomes 0.0 (no location)."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        coerced = float(value)
    except (TypeError, ValueError):
        return 0.0
    if np.isnan(coerced) or not -limit <= coerced <= limit:
        return 0.0
    return coerced


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _parse_service_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_clock_minutes(value: Any) -> Optional[int]:
    """Return minutes since midnight for a stored timestamp.

    Only the time-of-day as written is used; the date component and any UTC
    offset are ignored. Accepts ISO timestamps and bare ``HH:MM`` strings.
    """
    text = _clean_text(value)
    if not text:
        return None
    try:
        stamp = pd.Timestamp(text)
    except (ValueError, TypeError):
        return None
    if pd.isna(stamp):
        return None
    return stamp.hour * 60 + stamp.minute


def parse_services(raw: Any) -> Tuple[Service, ...]:
    services = []
    for item in _as_list(raw):
        if not isinstance(item, dict):
            continue
        remark = item.get("remark")
        services.append(
            Service(
                id=_parse_service_id(item.get("id")),
                name=_clean_text(item.get("name")),
                local_name=_clean_text(item.get("localName")),
                remark=_clean_text(remark) or None,
            )
        )
    return tuple(services)


def parse_work_hours(raw: Any) -> Tuple[WorkHour, ...]:
    blocks = []
    for item in _as_list(raw):
        if not isinstance(item, dict):
            continue
        days = []
        for day in _as_list(item.get("days")):
            try:
                day_number = int(day)
            except (TypeError, ValueError):
                continue
            if 0 <= day_number <= 6 and day_number not in days:
                days.append(day_number)
        operation_hours = tuple(
            OperationHour(
                start_minutes=parse_clock_minutes(op.get("startTime")),
                end_minutes=parse_clock_minutes(op.get("endTime")),
            )
            for op in _as_list(item.get("operationHours"))
            if isinstance(op, dict)
        )
        blocks.append(WorkHour(days=tuple(days), operation_hours=operation_hours))
    return tuple(blocks)


def parse_phone_numbers(raw: Any) -> Tuple[str, ...]:
    if isinstance(raw, str):
        raw = [raw]
    phones = (_clean_text(p) for p in _as_list(raw))
    return tuple(p for p in phones if p)


def parse_remarks(raw: Any) -> Tuple[Remark, ...]:
    return tuple(
        Remark(
            type=_clean_text(item.get("type")),
            content=_clean_text(item.get("remarkContent")),
            english_content=_clean_text(item.get("remarkEngContent")),
        )
        for item in _as_list(raw)
        if isinstance(item, dict)
    )


def normalize_provider(record: Dict[str, Any]) -> Dict[str, Any]:
    """Map one raw provider record to a DataFrame row."""
    row: Dict[str, Any] = {"ID": _clean_text(record.get("id"))}
    for source_key, column in TEXT_COLUMN_MAPPING.items():
        row[column] = _clean_text(record.get(source_key))

    geo = record.get("geo") if isinstance(record.get("geo"), dict) else {}
    row["Latitude"] = _clean_coordinate(geo.get("latitude"), 90)
    row["Longitude"] = _clean_coordinate(geo.get("longitude"), 180)

    row["Phone Numbers"] = parse_phone_numbers(record.get("phoneNumber"))
    row["Services"] = parse_services(record.get("services"))
    row["Applied Benefit Services"] = parse_services(record.get("appliedBenefitServiceDetails"))
    row["Work Hours"] = parse_work_hours(record.get("workHours"))
    for source_key, column in FLAG_COLUMN_MAPPING.items():
        row[column] = _clean_flag(record.get(source_key))
    row["Remarks"] = parse_remarks(record.get("listRemark"))
    return row


def prepare_provider_data(records: Iterable[Any], total: Optional[int] = None) -> Tuple[pd.DataFrame, DatasetSummary]:
    """Normalise raw provider records into the directory DataFrame.

    Records that are not objects or carry no ``id`` are skipped, and later
    records repeating an already-seen ``id`` are dropped so identities stay
    unique. Dataset order is otherwise preserved.

    Args:
        records: Raw provider records (decoded JSON objects)
        total: Declared dataset total, defaults to the number of records

    Returns:
        Tuple of (provider_df, summary)
    """
    rows = []
    seen_ids = set()
    duplicates = []
    skipped = 0
    records = list(records)

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"Skipping provider record #{index}: expected object, got {type(record).__name__}")
            skipped += 1
            continue
        row = normalize_provider(record)
        if not row["ID"]:
            logger.warning(f"Skipping provider record #{index}: missing id")
            skipped += 1
            continue
        if row["ID"] in seen_ids:
            duplicates.append(row["ID"])
            continue
        seen_ids.add(row["ID"])
        rows.append(row)

    provider_df = pd.DataFrame(rows, columns=PROVIDER_COLUMNS)
    provider_df = provider_df.astype({"Latitude": float, "Longitude": float})

    missing_geo = int(((provider_df["Latitude"] == 0) | (provider_df["Longitude"] == 0)).sum())
    warnings = []
    if duplicates:
        warnings.append(f"Dropped {len(duplicates)} provider(s) with duplicate id")
        logger.warning(f"Duplicate provider ids dropped: {duplicates[:10]}")
    if missing_geo:
        logger.info(f"{missing_geo} provider(s) have no usable location")

    summary = DatasetSummary(
        total=len(records) if total is None else total,
        loaded=len(provider_df),
        skipped=skipped,
        duplicate_ids=tuple(duplicates),
        missing_geo=missing_geo,
        warnings=tuple(warnings),
    )
    logger.info(f"Prepared {summary.loaded} providers ({summary.skipped} skipped, {len(duplicates)} duplicates)")
    return provider_df, summary
