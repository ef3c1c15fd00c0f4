# city_tsp/domain/distance.py
import math

import numpy as np

EARTH_RADIUS_M = 6_371_000.0


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters; inf when either point has no coordinates."""
    if not all(map(math.isfinite, (lat1, lon1, lat2, lon2))):
        return math.inf
    rlat1, rlat2 = math.radians(lat1), math.radians(lat2)
    dlat = rlat2 - rlat1
    dlon = math.radians(lon2 - lon1)
    a = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlon / 2) ** 2
    return EARTH_RADIUS_M * 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def haversine_matrix(lat: np.ndarray, lon: np.ndarray) -> np.ndarray:
    """
    Pairwise haversine distances for equally sized lat/lon vectors (degrees).
    Rows/columns of points without coordinates come back as inf.
    """
    lat = np.asarray(lat, dtype=float)
    lon = np.asarray(lon, dtype=float)
    known = np.isfinite(lat) & np.isfinite(lon)
    # zero out unknowns so the trig stays finite, mask them afterwards
    rlat = np.radians(np.where(known, lat, 0.0))
    rlon = np.radians(np.where(known, lon, 0.0))

    dlat = rlat[None, :] - rlat[:, None]
    dlon = rlon[None, :] - rlon[:, None]
    cos_lat = np.cos(rlat)
    a = np.sin(dlat / 2) ** 2 + cos_lat[:, None] * cos_lat[None, :] * np.sin(dlon / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    out = EARTH_RADIUS_M * 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    out[~(known[:, None] & known[None, :])] = np.inf
    return out
