"""Real-time broadcast message contract.

Builds the envelopes and channel lists a WebSocket layer needs to fan fusion
output out to subscribers. Transport is somebody else's job; this module only
decides *what* is sent and *where*.

Channels:
  global                  every message
  region:<region name>    alerts and reports for that region
  hazard:<hazard type>    alerts, and reports once classified
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from hazardfusion.models.alerts import Alert, AlertStatus
from hazardfusion.models.fusion import FusionResult
from hazardfusion.models.reports import Report
from hazardfusion.utils.date_utils import to_iso, utcnow

GLOBAL_CHANNEL = "global"


class BroadcastEvent(str, Enum):
    ALERT_CREATED = "alert_created"
    ALERT_UPDATED = "alert_updated"
    ALERT_RESOLVED = "alert_resolved"
    REPORT_SUBMITTED = "report_submitted"
    REPORT_VERIFIED = "report_verified"
    SYSTEM_NOTIFICATION = "system_notification"


_ALERT_EVENTS = {
    BroadcastEvent.ALERT_CREATED,
    BroadcastEvent.ALERT_UPDATED,
    BroadcastEvent.ALERT_RESOLVED,
}
_REPORT_EVENTS = {BroadcastEvent.REPORT_SUBMITTED, BroadcastEvent.REPORT_VERIFIED}


@dataclass
class BroadcastMessage:
    """Envelope pushed to subscribers, plus the channels it must reach."""

    event: BroadcastEvent
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=utcnow)
    region: Optional[str] = None
    channels: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Wire envelope: ``{event, data, timestamp, region?}``."""
        envelope: Dict[str, Any] = {
            "event": self.event.value,
            "data": self.data,
            "timestamp": to_iso(self.timestamp),
        }
        if self.region:
            envelope["region"] = self.region
        return envelope


def region_channel(name: str) -> str:
    return f"region:{name}"


def hazard_channel(hazard: str) -> str:
    return f"hazard:{hazard}"


def alert_channels(alert: Alert) -> List[str]:
    channels = [GLOBAL_CHANNEL]
    if alert.region.name:
        channels.append(region_channel(alert.region.name))
    channels.append(hazard_channel(alert.hazard_type.value))
    return channels


def report_channels(report: Report) -> List[str]:
    channels = [GLOBAL_CHANNEL]
    if report.region:
        channels.append(region_channel(report.region))
    if report.classification.hazard_type is not None:
        channels.append(hazard_channel(report.classification.hazard_type.value))
    return channels


def build_alert_message(alert: Alert, event: BroadcastEvent) -> BroadcastMessage:
    """Wrap an alert in a broadcast envelope.

    Raises:
        ValueError: If ``event`` is not an alert event.
    """
    event = BroadcastEvent(event)
    if event not in _ALERT_EVENTS:
        raise ValueError(f"{event.value} is not an alert event")
    return BroadcastMessage(
        event=event,
        data=alert.to_dict(),
        region=alert.region.name or None,
        channels=alert_channels(alert),
    )


def build_report_message(report: Report, event: BroadcastEvent) -> BroadcastMessage:
    """Wrap a report in a broadcast envelope.

    Raises:
        ValueError: If ``event`` is not a report event.
    """
    event = BroadcastEvent(event)
    if event not in _REPORT_EVENTS:
        raise ValueError(f"{event.value} is not a report event")
    return BroadcastMessage(
        event=event,
        data=report.to_dict(),
        region=report.region or None,
        channels=report_channels(report),
    )


def build_system_notification(title: str, message: str, severity: str = "info") -> BroadcastMessage:
    """System-wide notice, delivered on the global channel only."""
    if severity not in ("info", "warning", "error"):
        raise ValueError(f"Unknown notification severity: {severity}")
    return BroadcastMessage(
        event=BroadcastEvent.SYSTEM_NOTIFICATION,
        data={"title": title, "message": message, "severity": severity},
        channels=[GLOBAL_CHANNEL],
    )


def alert_event_for_status(alert: Alert) -> BroadcastEvent:
    """Event to emit after an alert's status changed."""
    if alert.status in (AlertStatus.RESOLVED, AlertStatus.FALSE_ALARM):
        return BroadcastEvent.ALERT_RESOLVED
    return BroadcastEvent.ALERT_UPDATED


def messages_for_fusion_result(result: FusionResult) -> Iterator[BroadcastMessage]:
    """Yield every message a finished fusion cycle should broadcast.

    New alerts produce ``alert_created``, merged alerts ``alert_updated``, and
    each report absorbed into an alerted cluster ``report_verified``.
    """
    for alert in result.new_alerts:
        yield build_alert_message(alert, BroadcastEvent.ALERT_CREATED)
    for alert in result.updated_alerts:
        yield build_alert_message(alert, BroadcastEvent.ALERT_UPDATED)

    processed = set(result.processed_report_ids)
    seen = set()
    for cluster in result.clusters:
        for report in cluster.reports:
            if report.id in processed and report.id not in seen:
                seen.add(report.id)
                yield build_report_message(report, BroadcastEvent.REPORT_VERIFIED)
