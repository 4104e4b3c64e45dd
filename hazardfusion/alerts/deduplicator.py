"""Alert deduplication — match clusters against currently active alerts.

A cluster matches an alert when both share the hazard type and the region
*name* (plain string equality, not spatial distance) and the alert's timestamp
lies within the dedup window of the cluster's start time. Only ``active``
alerts are eligible, so resolved or false-alarm incidents are never reopened
by a merge.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from config.defaults import DEDUP_WINDOW_HOURS
from config.settings import FusionConfig
from hazardfusion.alerts.alert_factory import create_alert_from_cluster
from hazardfusion.models.alerts import Alert, AlertStatus
from hazardfusion.models.fusion import ReportCluster
from hazardfusion.utils.date_utils import hours_between, utcnow

logger = logging.getLogger(__name__)


@dataclass
class DedupDecision:
    """Outcome of deduplicating one cluster: the alert to persist and whether it is new."""

    alert: Alert
    is_new: bool


def find_matching_alert(
    cluster: ReportCluster,
    active_alerts: Iterable[Alert],
    window_hours: float = DEDUP_WINDOW_HOURS,
) -> Optional[Alert]:
    """Return the first active alert covering the cluster, or None.

    Args:
        cluster: Candidate cluster.
        active_alerts: Alerts read from the store.
        window_hours: Dedup window in hours.

    Returns:
        The matching Alert, or None when the cluster describes a new incident.
    """
    for alert in active_alerts:
        if alert.status != AlertStatus.ACTIVE:
            continue
        if alert.hazard_type != cluster.hazard_type:
            continue
        if alert.region.name != cluster.region:
            continue
        if hours_between(alert.timestamp, cluster.start_time) <= window_hours:
            return alert
    return None


def merge_cluster_into_alert(alert: Alert, cluster: ReportCluster) -> Alert:
    """Fold a cluster into an existing alert without touching its status.

    related_reports becomes the order-preserving union of both id lists and
    confidence the maximum of the two.

    Returns:
        A new Alert instance; the input alert is not mutated.
    """
    related = list(dict.fromkeys(list(alert.related_reports) + cluster.report_ids))
    return dataclasses.replace(
        alert,
        related_reports=related,
        confidence=max(alert.confidence, cluster.confidence),
        updated_at=utcnow(),
    )


def deduplicate_cluster(
    cluster: ReportCluster,
    active_alerts: Iterable[Alert],
    config: Optional[FusionConfig] = None,
) -> DedupDecision:
    """Merge the cluster into a matching active alert or create a new one.

    Args:
        cluster: Scored cluster above the confidence threshold.
        active_alerts: Currently active alerts.
        config: FusionConfig with the dedup window.

    Returns:
        DedupDecision carrying the alert to persist.
    """
    cfg = config or FusionConfig()
    existing = find_matching_alert(cluster, active_alerts, cfg.dedup_window_hours)
    if existing is None:
        alert = create_alert_from_cluster(cluster, cfg)
        logger.debug(
            "Dedup: no active %s alert in %s — new alert %s",
            cluster.hazard_type.value, cluster.region, alert.id,
        )
        return DedupDecision(alert=alert, is_new=True)

    merged = merge_cluster_into_alert(existing, cluster)
    logger.debug(
        "Dedup: cluster %s merged into alert %s (%d related reports)",
        cluster.id, existing.id, len(merged.related_reports),
    )
    return DedupDecision(alert=merged, is_new=False)
