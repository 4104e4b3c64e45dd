"""Alert factory — materialise a new Alert from a report cluster."""

from __future__ import annotations

import uuid
from typing import List, Optional

from config.settings import FusionConfig
from hazardfusion.alerts.recommendations import generate_recommendations
from hazardfusion.models.alerts import (
    Alert,
    AlertRegion,
    AlertStatus,
    EscalationReason,
    GeoPolygon,
)
from hazardfusion.models.fusion import ReportCluster
from hazardfusion.utils.date_utils import format_span_hours, utcnow
from hazardfusion.utils.geo_utils import bounding_square

THRESHOLDS_MET = ["minimum_reports", "confidence_threshold"]


def _format_number(value: float) -> str:
    """Render 10.0 as "10" and 2.5 as "2.5"."""
    return f"{value:g}"


def build_summary(cluster: ReportCluster) -> str:
    """One-line alert summary, e.g. ``"High storm surge alert: 3 reports in Miami"``."""
    severity = cluster.severity.value.capitalize()
    hazard = cluster.hazard_type.value.replace("_", " ")
    return f"{severity} {hazard} alert: {cluster.size} reports in {cluster.region}"


def _distinct_sources(cluster: ReportCluster) -> List[str]:
    return list(dict.fromkeys(r.source.value for r in cluster.reports))


def create_alert_from_cluster(
    cluster: ReportCluster, config: Optional[FusionConfig] = None
) -> Alert:
    """Build a new active Alert describing a cluster.

    Args:
        cluster: Scored cluster that passed the confidence threshold.
        config: FusionConfig providing the clustering radius and bounds size.

    Returns:
        A new Alert with status ``active``, timestamped at the cluster's
        start time so the dedup window compares incident times.
        ``affected_population`` is left at 0 for downstream enrichment.
    """
    cfg = config or FusionConfig()
    now = utcnow()
    radius = _format_number(cfg.spatial_radius_km)

    return Alert(
        id=str(uuid.uuid4()),
        timestamp=cluster.start_time,
        region=AlertRegion(
            name=cluster.region,
            bounds=GeoPolygon(
                coordinates=bounding_square(
                    cluster.centroid_lat, cluster.centroid_lon, cfg.bounds_half_side_deg
                )
            ),
            affected_population=0,
        ),
        hazard_type=cluster.hazard_type,
        severity=cluster.severity,
        confidence=cluster.confidence,
        escalation_reason=EscalationReason(
            report_count=cluster.size,
            source_types=_distinct_sources(cluster),
            time_window=format_span_hours(cluster.start_time, cluster.end_time),
            geographic_spread=cfg.spatial_radius_km,
            thresholds_met=list(THRESHOLDS_MET),
            reasoning=f"Clustered {cluster.size} reports within {radius}km radius",
        ),
        related_reports=cluster.report_ids,
        status=AlertStatus.ACTIVE,
        ai_summary=build_summary(cluster),
        recommendations=generate_recommendations(cluster.hazard_type, cluster.severity),
        created_at=now,
        updated_at=now,
    )
