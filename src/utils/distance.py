"""Great-circle distance between providers and the user."""
from typing import List, Optional

import numpy as np
import pandas as pd

EARTH_RADIUS_KM = 6371.0
DISTANCE_COLUMN = "Distance (km)"


def distance_km(lat1, lon1, lat2, lon2):
    """Haversine distance in kilometres.

    Works on scalars and numpy arrays alike; identical points give 0.
    """
    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    dlat = np.radians(np.subtract(lat2, lat1))
    dlon = np.radians(np.subtract(lon2, lon1))
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def has_valid_geo(lat, lon) -> bool:
    """A coordinate counts as a location only when both axes are present and non-zero."""
    if lat is None or lon is None:
        return False
    try:
        lat = float(lat)
        lon = float(lon)
    except (TypeError, ValueError):
        return False
    if np.isnan(lat) or np.isnan(lon):
        return False
    return lat != 0 and lon != 0


def valid_geo_mask(provider_df: pd.DataFrame) -> np.ndarray:
    lat_arr = pd.to_numeric(provider_df["Latitude"], errors="coerce").to_numpy(dtype=float)
    lon_arr = pd.to_numeric(provider_df["Longitude"], errors="coerce").to_numpy(dtype=float)
    return ~np.isnan(lat_arr) & ~np.isnan(lon_arr) & (lat_arr != 0) & (lon_arr != 0)


def calculate_distances(user_lat: float, user_lon: float, provider_df: pd.DataFrame) -> List[Optional[float]]:
    """Distances (km) from the user to every provider row, None where geo is missing."""
    if provider_df.empty:
        return []
    lat_arr = pd.to_numeric(provider_df["Latitude"], errors="coerce").to_numpy(dtype=float)
    lon_arr = pd.to_numeric(provider_df["Longitude"], errors="coerce").to_numpy(dtype=float)

    valid = valid_geo_mask(provider_df)
    distances = np.full(len(provider_df), np.nan)
    distances[valid] = distance_km(user_lat, user_lon, lat_arr[valid], lon_arr[valid])

    return [None if np.isnan(d) else float(d) for d in distances]
