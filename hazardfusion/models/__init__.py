"""HazardFusion data models package.

All engine inputs and outputs are typed dataclasses. Closed vocabularies are
str-valued enums, so they compare equal to their raw string values.
"""

from hazardfusion.models.alerts import (
    Alert,
    AlertRegion,
    AlertStatus,
    EscalationReason,
    GeoPolygon,
)
from hazardfusion.models.fusion import (
    ConfidenceFactors,
    ConfidenceResult,
    FusionPhase,
    FusionResult,
    PhaseRecord,
    ReportCluster,
)
from hazardfusion.models.reports import (
    GeoLocation,
    HazardType,
    MediaFile,
    Report,
    ReportClassification,
    ReportContent,
    ReportStatus,
    SeverityLevel,
    SourceType,
)

__all__ = [
    # reports
    "HazardType",
    "SeverityLevel",
    "SourceType",
    "ReportStatus",
    "GeoLocation",
    "MediaFile",
    "ReportContent",
    "ReportClassification",
    "Report",
    # alerts
    "AlertStatus",
    "GeoPolygon",
    "AlertRegion",
    "EscalationReason",
    "Alert",
    # fusion
    "ConfidenceFactors",
    "ConfidenceResult",
    "ReportCluster",
    "FusionPhase",
    "PhaseRecord",
    "FusionResult",
]
