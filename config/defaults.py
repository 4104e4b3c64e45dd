"""HazardFusion — All default threshold values and configuration constants.

All tuneable values live here. Never hard-code magic numbers in source files.
Import constants from this module; override via FusionConfig at runtime.
"""

# ── Clustering ─────────────────────────────────────────────────────────────────
# Reports within this great-circle distance of a seed report may share a cluster
CLUSTER_SPATIAL_RADIUS_KM: float = 10.0

# Reports within this many hours of a seed report may share a cluster
CLUSTER_TEMPORAL_WINDOW_HOURS: float = 24.0

# Minimum cluster size (seed + neighbours) before a cluster is formed
MIN_REPORTS_FOR_ALERT: int = 2

# Clusters scoring below this composite confidence never produce an alert
MIN_CONFIDENCE_FOR_ALERT: float = 40.0

# ── Alert deduplication ────────────────────────────────────────────────────────
# Window (hours) between an active alert and a new cluster's start time inside
# which the cluster is merged instead of raising a new alert.
# Independent of CLUSTER_TEMPORAL_WINDOW_HOURS.
DEDUP_WINDOW_HOURS: float = 48.0

# ── Alert factory ──────────────────────────────────────────────────────────────
# Half side length (degrees) of the square polygon drawn around a cluster centroid
ALERT_BOUNDS_HALF_SIDE_DEG: float = 0.1

# ── Confidence scoring ─────────────────────────────────────────────────────────
# Factor weights (must sum to 1.0)
CONFIDENCE_WEIGHT_SOURCE_COUNT: float = 0.20
CONFIDENCE_WEIGHT_SOURCE_DIVERSITY: float = 0.20
CONFIDENCE_WEIGHT_TEMPORAL: float = 0.15
CONFIDENCE_WEIGHT_SPATIAL: float = 0.15
CONFIDENCE_WEIGHT_MEDIA: float = 0.15
CONFIDENCE_WEIGHT_AI: float = 0.15

# Per-source reliability used by the source diversity factor
SOURCE_RELIABILITY = {
    "citizen": 0.6,
    "social": 0.5,
    "official": 1.0,
}

# Reliability assumed for a source type missing from SOURCE_RELIABILITY
DEFAULT_SOURCE_RELIABILITY: float = 0.5

# Sum of all SOURCE_RELIABILITY values; normalises the reliability sum into [0, 60]
MAX_TOTAL_RELIABILITY: float = 2.1

# Hard bounds of every confidence value in the system
MIN_CONFIDENCE: float = 0.0
MAX_CONFIDENCE: float = 100.0

# ── Alert priority ─────────────────────────────────────────────────────────────
PRIORITY_SEVERITY_BOOST = {
    "high": 20.0,
    "moderate": 10.0,
    "low": 0.0,
}
PRIORITY_REPORT_BOOST_PER_REPORT: float = 2.0
PRIORITY_REPORT_BOOST_CAP: float = 20.0
PRIORITY_RECENT_HOURS: float = 1.0
PRIORITY_RECENT_BOOST: float = 20.0
PRIORITY_FRESH_HOURS: float = 6.0
PRIORITY_FRESH_BOOST: float = 10.0
PRIORITY_CAP: float = 100.0

# ── Fusion cycle ───────────────────────────────────────────────────────────────
# Number of most recent reports pulled from storage by run_fusion_cycle()
RECENT_REPORT_LIMIT: int = 100

# ── Classification collaborator ───────────────────────────────────────────────
# Items classified concurrently per batch window
CLASSIFICATION_CONCURRENCY: int = 5

# ── Logging ────────────────────────────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "INFO"
