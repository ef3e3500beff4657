"""IO and small helpers: phone/website/map links, CSV export, and streamlit error handler."""
import re
from typing import Optional
from urllib.parse import quote_plus

import pandas as pd
import streamlit as st

from src.utils.distance import DISTANCE_COLUMN, has_valid_geo

MAP_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={lat},{lon}"

EXPORT_COLUMNS = [
    "ID",
    "Name",
    "English Name",
    "Category",
    "Provider Type",
    "Address",
    "District",
    "City",
    "Country",
    "Phone Numbers",
    "Website",
    DISTANCE_COLUMN,
]


def format_phone_link(phone: str) -> Optional[str]:
    """
    Build a ``tel:`` link for a stored phone number.

    Formatting characters are dropped; a leading ``+`` is kept.

    Args:
        phone: Phone number as stored in the dataset

    Returns:
        The ``tel:`` URL, or None when the value has no digits
    """
    if not phone:
        return None
    digits = "".join(filter(str.isdigit, str(phone)))
    if not digits:
        return None
    prefix = "+" if str(phone).strip().startswith("+") else ""
    return f"tel:{prefix}{digits}"


def normalize_website_url(website: str) -> Optional[str]:
    if not website or not str(website).strip():
        return None
    url = str(website).strip()
    if not re.match(r"^https?://", url, flags=re.IGNORECASE):
        url = f"https://{url}"
    return url


def build_map_search_url(lat, lon) -> Optional[str]:
    if not has_valid_geo(lat, lon):
        return None
    return MAP_SEARCH_URL.format(lat=quote_plus(str(lat)), lon=quote_plus(str(lon)))


def results_to_csv_bytes(results_df: pd.DataFrame) -> bytes:
    """Serialize the visible result columns to UTF-8 CSV for download."""
    columns = [c for c in EXPORT_COLUMNS if c in results_df.columns]
    export_df = results_df[columns].copy()
    if "Phone Numbers" in export_df.columns:
        export_df["Phone Numbers"] = export_df["Phone Numbers"].apply(lambda phones: "; ".join(phones or ()))
    if DISTANCE_COLUMN in export_df.columns:
        export_df[DISTANCE_COLUMN] = export_df[DISTANCE_COLUMN].round(2)
    return export_df.to_csv(index=False).encode("utf-8-sig")


def sanitize_filename(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "", name.replace(" ", "_"))


def handle_streamlit_error(error: Exception, context: str = "operation") -> None:
    err = str(error)
    if isinstance(error, FileNotFoundError) or "not found" in err.lower():
        st.error("❌ **Data Error**: The provider dataset could not be found. Please check the configured path.")
    elif isinstance(error, ValueError) and "json" in err.lower():
        st.error("❌ **Data Error**: The provider dataset is not valid JSON. Please contact support.")
    elif "geocod" in err.lower():
        st.error(
            (
                "❌ **Location Error**: Unable to find coordinates for the provided address. "
                "Please check the address and try again."
            )
        )
    elif "network" in err.lower() or "connection" in err.lower():
        st.error("❌ **Network Error**: Unable to connect to the location service. Please check your connection.")
    elif "timeout" in err.lower():
        st.error("❌ **Timeout Error**: The location service is taking too long to respond. Please try again.")
    else:
        st.error(f"❌ **Error during {context}**: {err}")

    st.exception(error)
