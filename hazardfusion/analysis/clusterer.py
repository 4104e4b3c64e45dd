"""Spatio-temporal report clustering for HazardFusion.

Groups pending reports that plausibly describe the same incident. Each
unvisited report seeds a candidate cluster together with its *direct*
neighbours: reports within the spatial radius and temporal window that carry
a compatible hazard type. Neighbours of neighbours are not pulled in:
expansion is one hop from the seed, not a transitive DBSCAN closure.

Pure functions — no I/O or external calls.
"""

from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional, Sequence, Set

from config.settings import FusionConfig
from hazardfusion.analysis.confidence_scorer import calculate_confidence_score
from hazardfusion.analysis.severity import determine_severity
from hazardfusion.models.fusion import ReportCluster
from hazardfusion.models.reports import HazardType, Report
from hazardfusion.utils.date_utils import hours_between
from hazardfusion.utils.geo_utils import centroid, distance_km

logger = logging.getLogger(__name__)


def hazard_types_compatible(a: Report, b: Report) -> bool:
    """Two reports are compatible unless both are classified with different hazards."""
    ha = a.classification.hazard_type
    hb = b.classification.hazard_type
    if ha is None or hb is None:
        return True
    return ha == hb


def are_reports_related(a: Report, b: Report, config: Optional[FusionConfig] = None) -> bool:
    """Check whether two reports fall within the clustering thresholds.

    Args:
        a: First report.
        b: Second report.
        config: FusionConfig providing radius and window (defaults if omitted).

    Returns:
        True if the reports are spatially, temporally and hazard-compatible.
    """
    cfg = config or FusionConfig()
    dist = distance_km(
        a.location.latitude, a.location.longitude,
        b.location.latitude, b.location.longitude,
    )
    if dist > cfg.spatial_radius_km:
        return False
    if hours_between(a.timestamp, b.timestamp) > cfg.temporal_window_hours:
        return False
    return hazard_types_compatible(a, b)


def _dominant(values: Sequence[str]) -> str:
    """Most frequent value; ties go to the value encountered first."""
    counts: Dict[str, int] = {}
    for v in values:
        counts[v] = counts.get(v, 0) + 1
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[0][0]


def build_cluster(reports: Sequence[Report], config: Optional[FusionConfig] = None) -> ReportCluster:
    """Build a ReportCluster with all derived fields from its member reports.

    Args:
        reports: Non-empty list of member reports (seed first).
        config: FusionConfig providing the scoring weights.

    Returns:
        ReportCluster with centroid, dominant hazard and region, severity,
        confidence and time span filled in.

    Raises:
        ValueError: If ``reports`` is empty.
    """
    if not reports:
        raise ValueError("build_cluster() requires at least one report")
    cfg = config or FusionConfig()
    members = list(reports)

    c_lat, c_lon = centroid((r.location.latitude, r.location.longitude) for r in members)

    hazard = HazardType(_dominant([
        (r.classification.hazard_type or HazardType.OTHER).value for r in members
    ]))
    region = _dominant([r.region for r in members])

    confidence_result = calculate_confidence_score(members, cfg.confidence_weights)
    severity = determine_severity(members, confidence_result.overall)

    timestamps = [r.timestamp for r in members]

    return ReportCluster(
        id=str(uuid.uuid4()),
        reports=members,
        centroid_lat=c_lat,
        centroid_lon=c_lon,
        hazard_type=hazard,
        severity=severity,
        confidence=confidence_result.overall,
        region=region,
        start_time=min(timestamps),
        end_time=max(timestamps),
        confidence_result=confidence_result,
    )


def cluster_reports(
    reports: Sequence[Report], config: Optional[FusionConfig] = None
) -> List[ReportCluster]:
    """Group reports into spatio-temporal-hazard clusters.

    Reports are considered in input order. A seed forms a cluster only when it
    has enough direct neighbours to reach ``min_reports_for_alert`` members;
    otherwise it stays unclustered (and remains available as a neighbour for
    later seeds). Members of a formed cluster drop out of later neighbour
    lists but may still seed a cluster of their own, so a report can sit in
    one cluster as a neighbour and in a later one as its seed.

    Args:
        reports: Pending reports, in input order.
        config: FusionConfig with clustering thresholds.

    Returns:
        List of ReportCluster objects in seed order.
    """
    cfg = config or FusionConfig()
    clusters: List[ReportCluster] = []
    visited: Set[str] = set()
    clustered: Set[str] = set()

    for report in reports:
        if report.id in visited:
            continue
        visited.add(report.id)

        neighbors = [
            other for other in reports
            if other.id != report.id
            and other.id not in clustered
            and are_reports_related(report, other, cfg)
        ]

        if len(neighbors) >= cfg.min_reports_for_alert - 1:
            members = [report] + neighbors
            clustered.update(r.id for r in members)
            clusters.append(build_cluster(members, cfg))

    logger.debug(
        "Clustering: %d reports → %d clusters (%d unclustered)",
        len(reports),
        len(clusters),
        len(reports) - len(clustered),
    )
    return clusters
