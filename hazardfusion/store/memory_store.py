"""In-process store and cache implementations.

InMemoryStore keeps reports and alerts in dicts and can snapshot itself to a
JSON file (and restore from one) through hazardfusion.io.persistence. It is
the default collaborator for the CLI and for tests.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from hazardfusion.io.persistence import load_snapshot, save_snapshot
from hazardfusion.models.alerts import Alert, AlertStatus
from hazardfusion.models.reports import Report, ReportStatus
from hazardfusion.store.base import CacheInvalidator, ReportAlertStore
from hazardfusion.utils.date_utils import utcnow

logger = logging.getLogger(__name__)

ACTIVE_ALERTS_KEY = "alerts:active"
DASHBOARD_DATA_KEY = "dashboard:data"


class InMemoryStore(ReportAlertStore):
    """Dict-backed ReportAlertStore.

    Reads return deep copies so callers cannot change stored state without
    going through the store's methods.
    """

    def __init__(
        self,
        reports: Optional[Iterable[Report]] = None,
        alerts: Optional[Iterable[Alert]] = None,
    ) -> None:
        self._reports: Dict[str, Report] = {}
        self._alerts: Dict[str, Alert] = {}
        for report in reports or []:
            self._reports[report.id] = copy.deepcopy(report)
        for alert in alerts or []:
            self._alerts[alert.id] = copy.deepcopy(alert)

    # ── Reports ──────────────────────────────────────────────────────────────

    async def add_report(self, report: Report) -> Report:
        self._reports[report.id] = copy.deepcopy(report)
        return copy.deepcopy(report)

    async def get_report(self, report_id: str) -> Optional[Report]:
        report = self._reports.get(report_id)
        return copy.deepcopy(report) if report else None

    async def get_recent_reports(self, limit: int) -> List[Report]:
        ordered = sorted(self._reports.values(), key=lambda r: r.timestamp, reverse=True)
        return [copy.deepcopy(r) for r in ordered[: max(limit, 0)]]

    async def update_report_status(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        report = self._reports.get(report_id)
        if report is None:
            logger.warning("update_report_status: unknown report %s", report_id)
            return None
        report.status = ReportStatus(status)
        report.updated_at = utcnow()
        return copy.deepcopy(report)

    # ── Alerts ───────────────────────────────────────────────────────────────

    async def get_alert(self, alert_id: str) -> Optional[Alert]:
        alert = self._alerts.get(alert_id)
        return copy.deepcopy(alert) if alert else None

    async def list_alerts(self) -> List[Alert]:
        return [copy.deepcopy(a) for a in self._alerts.values()]

    async def get_active_alerts(self) -> List[Alert]:
        active = [a for a in self._alerts.values() if a.status == AlertStatus.ACTIVE]
        active.sort(key=lambda a: (a.confidence, a.timestamp), reverse=True)
        return [copy.deepcopy(a) for a in active]

    async def create_alert(self, alert: Alert) -> Alert:
        if alert.id in self._alerts:
            raise ValueError(f"Alert {alert.id} already exists")
        self._alerts[alert.id] = copy.deepcopy(alert)
        return copy.deepcopy(alert)

    async def update_alert(self, alert: Alert) -> Optional[Alert]:
        if alert.id not in self._alerts:
            logger.warning("update_alert: unknown alert %s", alert.id)
            return None
        self._alerts[alert.id] = copy.deepcopy(alert)
        return copy.deepcopy(alert)

    async def update_alert_status(self, alert_id: str, status: AlertStatus) -> Optional[Alert]:
        alert = self._alerts.get(alert_id)
        if alert is None:
            logger.warning("update_alert_status: unknown alert %s", alert_id)
            return None
        alert.status = AlertStatus(status)
        alert.updated_at = utcnow()
        return copy.deepcopy(alert)

    # ── Snapshots ────────────────────────────────────────────────────────────

    def snapshot(self, path: str | Path) -> None:
        """Write all reports and alerts to a JSON file atomically."""
        save_snapshot(self._reports.values(), self._alerts.values(), path)
        logger.info(
            "Store snapshot: %d reports, %d alerts → %s",
            len(self._reports), len(self._alerts), path,
        )

    @classmethod
    def from_snapshot(cls, path: str | Path) -> "InMemoryStore":
        """Load a store from a JSON snapshot; an absent or unreadable file yields an empty store.

        Raises:
            ValueError: On an unsupported snapshot version or an unknown enum value.
        """
        reports, alerts = load_snapshot(path)
        if not reports and not alerts:
            return cls()
        logger.info("Store restored: %d reports, %d alerts from %s", len(reports), len(alerts), path)
        return cls(reports=reports, alerts=alerts)


class InMemoryCache(CacheInvalidator):
    """Records the cache keys the engine invalidates, in call order."""

    def __init__(self) -> None:
        self.invalidated: List[str] = []

    @property
    def invalidation_count(self) -> int:
        return len(self.invalidated)

    async def invalidate_active_alerts(self) -> None:
        self.invalidated.append(ACTIVE_ALERTS_KEY)
        logger.debug("Cache: invalidated %s", ACTIVE_ALERTS_KEY)

    async def invalidate_dashboard_data(self) -> None:
        self.invalidated.append(DASHBOARD_DATA_KEY)
        logger.debug("Cache: invalidated %s", DASHBOARD_DATA_KEY)
