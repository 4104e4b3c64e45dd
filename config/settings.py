"""HazardFusion — FusionConfig and environment-based configuration loading.

All runtime configuration flows through FusionConfig. Engine code reads
thresholds from the config object, never from module-level globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from config.defaults import (
    ALERT_BOUNDS_HALF_SIDE_DEG,
    CLASSIFICATION_CONCURRENCY,
    CLUSTER_SPATIAL_RADIUS_KM,
    CLUSTER_TEMPORAL_WINDOW_HOURS,
    CONFIDENCE_WEIGHT_AI,
    CONFIDENCE_WEIGHT_MEDIA,
    CONFIDENCE_WEIGHT_SOURCE_COUNT,
    CONFIDENCE_WEIGHT_SOURCE_DIVERSITY,
    CONFIDENCE_WEIGHT_SPATIAL,
    CONFIDENCE_WEIGHT_TEMPORAL,
    DEDUP_WINDOW_HOURS,
    DEFAULT_LOG_LEVEL,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    MIN_CONFIDENCE_FOR_ALERT,
    MIN_REPORTS_FOR_ALERT,
    RECENT_REPORT_LIMIT,
)

# Load .env file if present; silently skip if missing
load_dotenv()


@dataclass
class ConfidenceWeights:
    """Weights for the six confidence factors."""

    source_count: float = CONFIDENCE_WEIGHT_SOURCE_COUNT
    source_diversity: float = CONFIDENCE_WEIGHT_SOURCE_DIVERSITY
    temporal_consistency: float = CONFIDENCE_WEIGHT_TEMPORAL
    spatial_consistency: float = CONFIDENCE_WEIGHT_SPATIAL
    media_evidence: float = CONFIDENCE_WEIGHT_MEDIA
    ai_confidence: float = CONFIDENCE_WEIGHT_AI

    def __post_init__(self) -> None:
        total = (
            self.source_count
            + self.source_diversity
            + self.temporal_consistency
            + self.spatial_consistency
            + self.media_evidence
            + self.ai_confidence
        )
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"ConfidenceWeights must sum to 1.0, got {total:.4f}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass
class FusionConfig:
    """Single configuration object threaded through the fusion engine.

    Clustering radius and window, dedup window, alert thresholds, scoring
    weights, and logging options all live here.
    """

    # ── Clustering ─────────────────────────────────────────────────────────────
    spatial_radius_km: float = CLUSTER_SPATIAL_RADIUS_KM
    temporal_window_hours: float = CLUSTER_TEMPORAL_WINDOW_HOURS
    min_reports_for_alert: int = MIN_REPORTS_FOR_ALERT
    min_confidence_for_alert: float = MIN_CONFIDENCE_FOR_ALERT

    # ── Deduplication ──────────────────────────────────────────────────────────
    dedup_window_hours: float = DEDUP_WINDOW_HOURS

    # ── Alert materialisation ──────────────────────────────────────────────────
    bounds_half_side_deg: float = ALERT_BOUNDS_HALF_SIDE_DEG

    # ── Confidence scoring ─────────────────────────────────────────────────────
    confidence_weights: ConfidenceWeights = field(default_factory=ConfidenceWeights)

    # ── Fusion cycle ───────────────────────────────────────────────────────────
    recent_report_limit: int = field(
        default_factory=lambda: _env_int("FUSION_RECENT_REPORT_LIMIT", RECENT_REPORT_LIMIT)
    )
    classification_concurrency: int = CLASSIFICATION_CONCURRENCY

    # ── Storage and logging ────────────────────────────────────────────────────
    snapshot_path: Optional[str] = field(
        default_factory=lambda: os.getenv("FUSION_SNAPSHOT_PATH") or None
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))

    def __post_init__(self) -> None:
        if self.min_reports_for_alert < 2:
            raise ValueError(
                f"min_reports_for_alert must be at least 2, got {self.min_reports_for_alert}"
            )
        if self.spatial_radius_km <= 0 or self.temporal_window_hours <= 0:
            raise ValueError("Clustering radius and window must be positive")
        if self.dedup_window_hours <= 0:
            raise ValueError("dedup_window_hours must be positive")
        if self.classification_concurrency < 1:
            self.classification_concurrency = 1
        # Clamp the alert threshold into the confidence range
        self.min_confidence_for_alert = min(
            max(self.min_confidence_for_alert, MIN_CONFIDENCE), MAX_CONFIDENCE
        )
