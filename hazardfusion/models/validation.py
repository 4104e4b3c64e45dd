"""Field-level validation for reports and alerts.

Validators return a list of human-readable problems; an empty list means the
entity is valid. They never raise.
"""

from __future__ import annotations

import math
from typing import List

from hazardfusion.models.alerts import Alert
from hazardfusion.models.reports import Report


def _in_range(value: object, low: float, high: float) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    if math.isnan(value):
        return False
    return low <= value <= high


def validate_report(report: Report) -> List[str]:
    """Check coordinates, description text and classifier confidence."""
    errors: List[str] = []

    if report.location is None:
        errors.append("Location is required")
    else:
        if not _in_range(report.location.latitude, -90, 90):
            errors.append("Valid latitude is required (-90 to 90)")
        if not _in_range(report.location.longitude, -180, 180):
            errors.append("Valid longitude is required (-180 to 180)")

    if not report.content.original_text or not report.content.original_text.strip():
        errors.append("Description text is required")

    if not _in_range(report.classification.confidence, 0, 100):
        errors.append("Confidence score must be between 0 and 100")

    return errors


def validate_alert(alert: Alert) -> List[str]:
    """Check region, confidence, summary and escalation reason of an alert."""
    errors: List[str] = []

    if not alert.region.name or not alert.region.name.strip():
        errors.append("Region name is required")

    if not _in_range(alert.confidence, 0, 100):
        errors.append("Confidence score must be between 0 and 100")

    if not alert.ai_summary or not alert.ai_summary.strip():
        errors.append("AI summary is required")

    reason = alert.escalation_reason
    if reason is None:
        errors.append("Escalation reason is required")
    else:
        if reason.report_count < 1:
            errors.append("Report count must be at least 1")
        if not reason.source_types:
            errors.append("At least one source type is required")

    return errors
