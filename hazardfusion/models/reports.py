"""Report data models for HazardFusion.

Reports are produced by ingestion and classification upstream of the fusion
engine. The engine reads them and only ever changes ``status``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from hazardfusion.utils.date_utils import parse_timestamp, to_iso, utcnow


class HazardType(str, Enum):
    """Closed vocabulary of coastal hazard categories."""

    FLOODING = "flooding"
    STORM_SURGE = "storm_surge"
    HIGH_WAVES = "high_waves"
    EROSION = "erosion"
    RIP_CURRENT = "rip_current"
    TSUNAMI = "tsunami"
    POLLUTION = "pollution"
    OTHER = "other"


class SeverityLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class SourceType(str, Enum):
    CITIZEN = "citizen"
    SOCIAL = "social"
    OFFICIAL = "official"


class ReportStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass
class GeoLocation:
    """A WGS84 point with optional accuracy (metres) and street address."""

    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"latitude": self.latitude, "longitude": self.longitude}
        if self.accuracy is not None:
            data["accuracy"] = self.accuracy
        if self.address is not None:
            data["address"] = self.address
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoLocation":
        return cls(
            latitude=float(data.get("latitude", data.get("lat"))),
            longitude=float(data.get("longitude", data.get("lon"))),
            accuracy=data.get("accuracy"),
            address=data.get("address"),
        )


@dataclass
class MediaFile:
    """An uploaded photo or video attached to a report."""

    id: str
    file_name: str = ""
    file_path: str = ""
    file_type: str = ""
    file_size: int = 0
    mime_type: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "file_name": self.file_name,
            "file_path": self.file_path,
            "file_type": self.file_type,
            "file_size": self.file_size,
            "mime_type": self.mime_type,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaFile":
        return cls(
            id=str(data["id"]),
            file_name=data.get("file_name", ""),
            file_path=data.get("file_path", ""),
            file_type=data.get("file_type", ""),
            file_size=int(data.get("file_size", 0)),
            mime_type=data.get("mime_type", ""),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class ReportContent:
    """Free-text body of a report plus any attached media."""

    original_text: str = ""
    language: str = "en"
    translated_text: Optional[str] = None
    media_files: List[MediaFile] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_text": self.original_text,
            "language": self.language,
            "translated_text": self.translated_text,
            "media_files": [m.to_dict() for m in self.media_files],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportContent":
        return cls(
            original_text=data.get("original_text", ""),
            language=data.get("language", "en"),
            translated_text=data.get("translated_text"),
            media_files=[MediaFile.from_dict(m) for m in data.get("media_files") or []],
        )


@dataclass
class ReportClassification:
    """Output of the upstream hazard classifier, treated as opaque by the engine."""

    hazard_type: Optional[HazardType] = None
    severity: Optional[SeverityLevel] = None
    confidence: float = 0.0   # 0–100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hazard_type": self.hazard_type.value if self.hazard_type else None,
            "severity": self.severity.value if self.severity else None,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportClassification":
        hazard = data.get("hazard_type")
        severity = data.get("severity")
        return cls(
            hazard_type=HazardType(hazard) if hazard else None,
            severity=SeverityLevel(severity) if severity else None,
            confidence=float(data.get("confidence", 0.0)),
        )


@dataclass
class Report:
    """A single geotagged hazard report."""

    id: str
    timestamp: datetime
    location: GeoLocation
    source: SourceType
    classification: ReportClassification = field(default_factory=ReportClassification)
    status: ReportStatus = ReportStatus.PENDING
    region: str = ""
    content: ReportContent = field(default_factory=ReportContent)
    ai_summary: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.timestamp = parse_timestamp(self.timestamp)
        self.source = SourceType(self.source)
        self.status = ReportStatus(self.status)

    @property
    def media_count(self) -> int:
        return len(self.content.media_files)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": to_iso(self.timestamp),
            "location": self.location.to_dict(),
            "source": self.source.value,
            "classification": self.classification.to_dict(),
            "status": self.status.value,
            "region": self.region,
            "content": self.content.to_dict(),
            "ai_summary": self.ai_summary,
            "created_at": to_iso(self.created_at),
            "updated_at": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Report":
        """Build a Report from its dict form.

        Raises:
            ValueError: On an unknown source, status, hazard type or severity.
            KeyError: If a required field is missing.
        """
        now = utcnow()
        return cls(
            id=str(data["id"]),
            timestamp=parse_timestamp(data["timestamp"]),
            location=GeoLocation.from_dict(data["location"]),
            source=SourceType(data.get("source", SourceType.CITIZEN.value)),
            classification=ReportClassification.from_dict(data.get("classification") or {}),
            status=ReportStatus(data.get("status", ReportStatus.PENDING.value)),
            region=data.get("region", ""),
            content=ReportContent.from_dict(data.get("content") or {}),
            ai_summary=data.get("ai_summary"),
            created_at=parse_timestamp(data["created_at"]) if data.get("created_at") else now,
            updated_at=parse_timestamp(data["updated_at"]) if data.get("updated_at") else now,
        )
