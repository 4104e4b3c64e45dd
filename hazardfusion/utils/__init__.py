"""HazardFusion utilities package.

Stateless helpers with no external calls or side effects.
"""

from hazardfusion.utils.date_utils import hours_between, parse_timestamp, to_iso, utcnow
from hazardfusion.utils.geo_utils import bounding_square, centroid, distance_km

__all__ = [
    "parse_timestamp",
    "to_iso",
    "hours_between",
    "utcnow",
    "distance_km",
    "centroid",
    "bounding_square",
]
