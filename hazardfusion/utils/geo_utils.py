"""Geographic utility functions for HazardFusion.

Pure geographic computations — no I/O, no external calls.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points using the Haversine formula.

    Symmetric in its two points and never negative. The haversine term is
    clamped to [0, 1] so floating error near antipodal points cannot push
    sqrt() out of its domain.

    Args:
        lat1: Latitude of first point in decimal degrees.
        lon1: Longitude of first point in decimal degrees.
        lat2: Latitude of second point in decimal degrees.
        lon2: Longitude of second point in decimal degrees.

    Returns:
        Distance in kilometres.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def centroid(points: Iterable[Tuple[float, float]]) -> Tuple[float, float]:
    """Arithmetic mean of a collection of (lat, lon) pairs.

    Args:
        points: Iterable of (latitude, longitude) tuples.

    Returns:
        (lat, lon) centroid.

    Raises:
        ValueError: If no points are given.
    """
    pts = list(points)
    if not pts:
        raise ValueError("centroid() requires at least one point")
    lat = sum(p[0] for p in pts) / len(pts)
    lon = sum(p[1] for p in pts) / len(pts)
    return lat, lon


def bounding_square(lat: float, lon: float, half_side_deg: float) -> List[List[List[float]]]:
    """Closed GeoJSON polygon ring of a square centred on a point.

    Coordinates are ``[lon, lat]`` pairs, counter-clockwise from the
    south-west corner, with the first vertex repeated at the end.

    Args:
        lat: Centre latitude.
        lon: Centre longitude.
        half_side_deg: Half the side length in degrees.

    Returns:
        Polygon coordinates as ``[[[lon, lat], ...]]``.
    """
    d = half_side_deg
    return [[
        [lon - d, lat - d],
        [lon + d, lat - d],
        [lon + d, lat + d],
        [lon - d, lat + d],
        [lon - d, lat - d],
    ]]
