"""HazardFusion configuration package."""

from config.defaults import (
    CLUSTER_SPATIAL_RADIUS_KM,
    CLUSTER_TEMPORAL_WINDOW_HOURS,
    DEDUP_WINDOW_HOURS,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE_FOR_ALERT,
    MIN_REPORTS_FOR_ALERT,
    RECENT_REPORT_LIMIT,
)
from config.settings import ConfidenceWeights, FusionConfig

__all__ = [
    "FusionConfig",
    "ConfidenceWeights",
    "CLUSTER_SPATIAL_RADIUS_KM",
    "CLUSTER_TEMPORAL_WINDOW_HOURS",
    "DEDUP_WINDOW_HOURS",
    "MAX_CONFIDENCE",
    "MIN_CONFIDENCE_FOR_ALERT",
    "MIN_REPORTS_FOR_ALERT",
    "RECENT_REPORT_LIMIT",
]
