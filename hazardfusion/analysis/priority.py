"""Alert priority for presentation ordering.

Priority never influences fusion decisions; it only orders active alerts for
display.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence

from config.defaults import (
    PRIORITY_CAP,
    PRIORITY_FRESH_BOOST,
    PRIORITY_FRESH_HOURS,
    PRIORITY_RECENT_BOOST,
    PRIORITY_RECENT_HOURS,
    PRIORITY_REPORT_BOOST_CAP,
    PRIORITY_REPORT_BOOST_PER_REPORT,
    PRIORITY_SEVERITY_BOOST,
)
from hazardfusion.models.alerts import Alert
from hazardfusion.utils.date_utils import utcnow


def _recency_boost(alert: Alert, now: datetime) -> float:
    age_hours = (now - alert.timestamp).total_seconds() / 3600.0
    if age_hours < PRIORITY_RECENT_HOURS:
        return PRIORITY_RECENT_BOOST
    if age_hours < PRIORITY_FRESH_HOURS:
        return PRIORITY_FRESH_BOOST
    return 0.0


def calculate_alert_priority(alert: Alert, now: Optional[datetime] = None) -> float:
    """Compute a 0–100 ordering score for an alert.

    confidence (clamped to [0, 100]) + severity boost + report-count boost +
    recency boost, capped at 100. Any NaN along the way yields 0.

    Args:
        alert: Alert to score.
        now: Reference time for the recency boost (defaults to current UTC time).

    Returns:
        Priority in [0, 100].
    """
    now = now or utcnow()
    try:
        confidence = float(alert.confidence)
        report_count = float(alert.escalation_reason.report_count)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(confidence) or math.isnan(report_count):
        return 0.0

    priority = min(max(confidence, 0.0), 100.0)
    priority += PRIORITY_SEVERITY_BOOST.get(alert.severity.value, 0.0)
    priority += min(report_count * PRIORITY_REPORT_BOOST_PER_REPORT, PRIORITY_REPORT_BOOST_CAP)
    priority += _recency_boost(alert, now)

    final = min(priority, PRIORITY_CAP)
    return 0.0 if math.isnan(final) else final


def sort_alerts_by_priority(
    alerts: Sequence[Alert], now: Optional[datetime] = None
) -> List[Alert]:
    """Return alerts ordered by descending priority (stable for ties)."""
    now = now or utcnow()
    return sorted(alerts, key=lambda a: calculate_alert_priority(a, now), reverse=True)
