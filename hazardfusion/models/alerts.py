"""Alert data models for HazardFusion.

An Alert is the persisted, user-facing outcome of fusing a cluster of reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from hazardfusion.models.reports import HazardType, SeverityLevel
from hazardfusion.utils.date_utils import parse_timestamp, to_iso, utcnow


class AlertStatus(str, Enum):
    ACTIVE = "active"
    VERIFIED = "verified"
    RESOLVED = "resolved"
    FALSE_ALARM = "false_alarm"


@dataclass
class GeoPolygon:
    """GeoJSON-style polygon; coordinates are rings of ``[lon, lat]`` pairs."""

    coordinates: List[List[List[float]]] = field(default_factory=list)
    type: str = "Polygon"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "coordinates": self.coordinates}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoPolygon":
        return cls(
            coordinates=data.get("coordinates") or [],
            type=data.get("type", "Polygon"),
        )


@dataclass
class AlertRegion:
    name: str
    bounds: GeoPolygon = field(default_factory=GeoPolygon)
    affected_population: int = 0   # filled by downstream enrichment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "bounds": self.bounds.to_dict(),
            "affected_population": self.affected_population,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlertRegion":
        return cls(
            name=data.get("name", ""),
            bounds=GeoPolygon.from_dict(data.get("bounds") or {}),
            affected_population=int(data.get("affected_population", 0)),
        )


@dataclass
class EscalationReason:
    """Structured justification attached to an alert."""

    report_count: int
    source_types: List[str] = field(default_factory=list)
    time_window: str = ""
    geographic_spread: float = 0.0   # km
    thresholds_met: List[str] = field(default_factory=list)
    reasoning: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_count": self.report_count,
            "source_types": list(self.source_types),
            "time_window": self.time_window,
            "geographic_spread": self.geographic_spread,
            "thresholds_met": list(self.thresholds_met),
            "reasoning": self.reasoning,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EscalationReason":
        return cls(
            report_count=int(data.get("report_count", 0)),
            source_types=list(data.get("source_types") or []),
            time_window=data.get("time_window", ""),
            geographic_spread=float(data.get("geographic_spread", 0.0)),
            thresholds_met=list(data.get("thresholds_met") or []),
            reasoning=data.get("reasoning", ""),
        )


@dataclass
class Alert:
    """A raised hazard alert covering one real-world incident."""

    id: str
    timestamp: datetime
    region: AlertRegion
    hazard_type: HazardType
    severity: SeverityLevel
    confidence: float
    escalation_reason: EscalationReason
    related_reports: List[str] = field(default_factory=list)
    status: AlertStatus = AlertStatus.ACTIVE
    ai_summary: str = ""
    incident_id: Optional[str] = None
    recommendations: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.timestamp = parse_timestamp(self.timestamp)
        self.hazard_type = HazardType(self.hazard_type)
        self.severity = SeverityLevel(self.severity)
        self.status = AlertStatus(self.status)
        # related_reports is a set with stable order
        self.related_reports = list(dict.fromkeys(self.related_reports))

    @property
    def is_active(self) -> bool:
        return self.status == AlertStatus.ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "incident_id": self.incident_id,
            "timestamp": to_iso(self.timestamp),
            "region": self.region.to_dict(),
            "hazard_type": self.hazard_type.value,
            "severity": self.severity.value,
            "confidence": self.confidence,
            "escalation_reason": self.escalation_reason.to_dict(),
            "related_reports": list(self.related_reports),
            "status": self.status.value,
            "ai_summary": self.ai_summary,
            "recommendations": list(self.recommendations),
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Alert":
        now = utcnow()
        return cls(
            id=str(data["id"]),
            incident_id=data.get("incident_id"),
            timestamp=parse_timestamp(data["timestamp"]),
            region=AlertRegion.from_dict(data.get("region") or {}),
            hazard_type=HazardType(data["hazard_type"]),
            severity=SeverityLevel(data["severity"]),
            confidence=float(data.get("confidence", 0.0)),
            escalation_reason=EscalationReason.from_dict(data.get("escalation_reason") or {}),
            related_reports=list(data.get("related_reports") or []),
            status=AlertStatus(data.get("status", AlertStatus.ACTIVE.value)),
            ai_summary=data.get("ai_summary", ""),
            recommendations=list(data.get("recommendations") or []),
            created_at=parse_timestamp(data["created_at"]) if data.get("created_at") else now,
            updated_at=parse_timestamp(data["updated_at"]) if data.get("updated_at") else now,
        )
