"""Fusion data models for HazardFusion.

Defines the confidence score breakdown, the ephemeral ReportCluster, and the
FusionResult returned by one fusion cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from hazardfusion.models.alerts import Alert
from hazardfusion.models.reports import HazardType, Report, SeverityLevel
from hazardfusion.utils.date_utils import to_iso


@dataclass
class ConfidenceFactors:
    """The six scoring factors, each in [0, 100]."""

    source_count: float = 0.0
    source_diversity: float = 0.0
    temporal_consistency: float = 0.0
    spatial_consistency: float = 0.0
    media_evidence: float = 0.0
    ai_confidence: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "source_count": self.source_count,
            "source_diversity": self.source_diversity,
            "temporal_consistency": self.temporal_consistency,
            "spatial_consistency": self.spatial_consistency,
            "media_evidence": self.media_evidence,
            "ai_confidence": self.ai_confidence,
        }


@dataclass
class ConfidenceResult:
    """Composite confidence for a set of reports."""

    overall: int = 0
    factors: ConfidenceFactors = field(default_factory=ConfidenceFactors)
    breakdown: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "factors": self.factors.to_dict(),
            "breakdown": list(self.breakdown),
        }


@dataclass
class ReportCluster:
    """An ephemeral group of reports judged to describe one incident.

    Lives for a single fusion cycle and is never persisted.
    """

    id: str
    reports: List[Report]
    centroid_lat: float
    centroid_lon: float
    hazard_type: HazardType
    severity: SeverityLevel
    confidence: float
    region: str
    start_time: datetime
    end_time: datetime
    confidence_result: Optional[ConfidenceResult] = None

    @property
    def report_ids(self) -> List[str]:
        return [r.id for r in self.reports]

    @property
    def size(self) -> int:
        return len(self.reports)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "report_ids": self.report_ids,
            "centroid": {"latitude": self.centroid_lat, "longitude": self.centroid_lon},
            "hazard_type": self.hazard_type.value,
            "severity": self.severity.value,
            "confidence": self.confidence,
            "region": self.region,
            "start_time": to_iso(self.start_time),
            "end_time": to_iso(self.end_time),
            "confidence_result": (
                self.confidence_result.to_dict() if self.confidence_result else None
            ),
        }


class FusionPhase(str, Enum):
    """States a fusion cycle moves through."""

    IDLE = "idle"
    CLUSTERING = "clustering"
    SCORING = "scoring"
    DEDUPLICATING = "deduplicating"
    PERSISTING = "persisting"


@dataclass
class PhaseRecord:
    """Timing and status record for a single cycle phase."""

    phase: FusionPhase
    start_time: datetime
    end_time: Optional[datetime] = None
    status: str = "OK"

    @property
    def elapsed_seconds(self) -> float:
        """Compute elapsed time in seconds."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()


@dataclass
class FusionResult:
    """Complete output of one fusion cycle."""

    cycle_id: str = ""
    clusters: List[ReportCluster] = field(default_factory=list)
    new_alerts: List[Alert] = field(default_factory=list)
    updated_alerts: List[Alert] = field(default_factory=list)
    processed_report_ids: List[str] = field(default_factory=list)
    skipped_cluster_ids: List[str] = field(default_factory=list)
    phase_log: List[PhaseRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.clusters or self.new_alerts or self.updated_alerts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cycle_id": self.cycle_id,
            "clusters": [c.to_dict() for c in self.clusters],
            "new_alerts": [a.to_dict() for a in self.new_alerts],
            "updated_alerts": [a.to_dict() for a in self.updated_alerts],
            "processed_report_ids": list(self.processed_report_ids),
            "skipped_cluster_ids": list(self.skipped_cluster_ids),
        }
