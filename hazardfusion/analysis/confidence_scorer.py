"""Multi-factor confidence scoring for HazardFusion.

Scores a set of reports on six factors, each in [0, 100], and combines them
with fixed weights into a single composite confidence:

  source_count 0.20, source_diversity 0.20, temporal_consistency 0.15,
  spatial_consistency 0.15, media_evidence 0.15, ai_confidence 0.15

Pure functions — no I/O or external calls.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from config.defaults import (
    DEFAULT_SOURCE_RELIABILITY,
    MAX_CONFIDENCE,
    MAX_TOTAL_RELIABILITY,
    MIN_CONFIDENCE,
    SOURCE_RELIABILITY,
)
from config.settings import ConfidenceWeights
from hazardfusion.models.fusion import ConfidenceFactors, ConfidenceResult
from hazardfusion.models.reports import Report
from hazardfusion.utils.date_utils import round_half_up
from hazardfusion.utils.geo_utils import centroid, distance_km

logger = logging.getLogger(__name__)

EMPTY_BREAKDOWN = "No reports to analyze"

_ONE_HOUR_S = 3600.0
_SIX_HOURS_S = 6 * _ONE_HOUR_S
_ONE_DAY_S = 24 * _ONE_HOUR_S


def source_count_score(report_count: int) -> float:
    """Stepped, then logarithmic, score for the number of corroborating reports."""
    if report_count <= 0:
        return 0.0
    if report_count == 1:
        return 30.0
    if report_count == 2:
        return 50.0
    if report_count <= 5:
        return 60.0 + (report_count - 2) * 5
    if report_count <= 10:
        return 75.0 + (report_count - 5) * 2
    return min(90.0, 85.0 + math.log10(report_count - 9) * 5)


def source_diversity_score(reports: Sequence[Report]) -> float:
    """Score the reliability and variety of source types present.

    Reliability is summed over the *set* of distinct source types rather than
    averaged, and the variety bonus grows with the set size, so adding a report
    from a new source type never lowers this factor.
    """
    source_types = {r.source.value for r in reports}
    if not source_types:
        return 0.0

    total_reliability = sum(
        SOURCE_RELIABILITY.get(s, DEFAULT_SOURCE_RELIABILITY) for s in source_types
    )
    reliability_score = (total_reliability / MAX_TOTAL_RELIABILITY) * 60
    diversity_bonus = min(len(source_types) * 15, 40)
    return min(reliability_score + diversity_bonus, 100.0)


def temporal_consistency_score(reports: Sequence[Report]) -> float:
    """Higher when reports arrive close together in time."""
    if len(reports) < 2:
        return 50.0

    timestamps = sorted(r.timestamp for r in reports)
    span = (timestamps[-1] - timestamps[0]).total_seconds()
    avg_interval = span / (len(timestamps) - 1)

    if avg_interval < _ONE_HOUR_S:
        return 95.0
    if avg_interval < _SIX_HOURS_S:
        return 80.0
    if avg_interval < _ONE_DAY_S:
        return 60.0
    return 40.0


def spatial_consistency_score(reports: Sequence[Report]) -> float:
    """Higher when reports sit close to their common centroid."""
    if len(reports) < 2:
        return 50.0

    c_lat, c_lon = centroid((r.location.latitude, r.location.longitude) for r in reports)
    distances = [
        distance_km(r.location.latitude, r.location.longitude, c_lat, c_lon)
        for r in reports
    ]
    avg_distance = sum(distances) / len(distances)

    if avg_distance < 1:
        return 95.0
    if avg_distance < 5:
        return 85.0
    if avg_distance < 10:
        return 70.0
    if avg_distance < 25:
        return 55.0
    return 40.0


def media_evidence_score(reports: Sequence[Report]) -> float:
    """Score attached photos and videos: share of reports with media plus a volume bonus."""
    with_media = [r for r in reports if r.media_count > 0]
    if not with_media:
        return 30.0

    ratio = len(with_media) / len(reports)
    total_media = sum(r.media_count for r in reports)
    return min(40 + ratio * 40 + min(total_media * 2, 20), 100.0)


def ai_confidence_score(reports: Sequence[Report]) -> float:
    """Mean classifier confidence over reports that have one."""
    confidences = [
        r.classification.confidence for r in reports if r.classification.confidence > 0
    ]
    if not confidences:
        return 50.0
    return sum(confidences) / len(confidences)


def calculate_confidence_score(
    reports: Sequence[Report],
    weights: Optional[ConfidenceWeights] = None,
) -> ConfidenceResult:
    """Compute the composite confidence for a set of reports.

    Args:
        reports: Reports judged to describe the same incident.
        weights: Factor weights (defaults to the standard weighting).

    Returns:
        ConfidenceResult with ``overall`` in [0, 100], per-factor scores and a
        human-readable breakdown. An empty input scores 0 with the breakdown
        ``["No reports to analyze"]``.
    """
    if not reports:
        return ConfidenceResult(
            overall=0,
            factors=ConfidenceFactors(),
            breakdown=[EMPTY_BREAKDOWN],
        )

    w = weights or ConfidenceWeights()
    factors = ConfidenceFactors(
        source_count=source_count_score(len(reports)),
        source_diversity=source_diversity_score(reports),
        temporal_consistency=temporal_consistency_score(reports),
        spatial_consistency=spatial_consistency_score(reports),
        media_evidence=media_evidence_score(reports),
        ai_confidence=ai_confidence_score(reports),
    )

    weighted = (
        factors.source_count * w.source_count
        + factors.source_diversity * w.source_diversity
        + factors.temporal_consistency * w.temporal_consistency
        + factors.spatial_consistency * w.spatial_consistency
        + factors.media_evidence * w.media_evidence
        + factors.ai_confidence * w.ai_confidence
    )
    overall = round_half_up(weighted)
    overall = int(min(max(overall, MIN_CONFIDENCE), MAX_CONFIDENCE))

    breakdown = _build_breakdown(reports, factors)
    logger.debug("Confidence for %d reports: %d (%s)", len(reports), overall, factors)
    return ConfidenceResult(overall=overall, factors=factors, breakdown=breakdown)


def _build_breakdown(reports: Sequence[Report], factors: ConfidenceFactors) -> List[str]:
    breakdown = [
        f"{len(reports)} corroborating report(s) ({round_half_up(factors.source_count)}%)",
        f"{len({r.source for r in reports})} unique source type(s) "
        f"({round_half_up(factors.source_diversity)}%)",
    ]
    if factors.temporal_consistency >= 80:
        breakdown.append("Reports are temporally clustered (high consistency)")
    if factors.spatial_consistency >= 80:
        breakdown.append("Reports are geographically clustered (high consistency)")

    media_count = sum(r.media_count for r in reports)
    if media_count > 0:
        breakdown.append(f"{media_count} media file(s) attached")
    return breakdown
