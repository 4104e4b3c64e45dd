"""Collaborator interfaces consumed by the fusion engine.

The engine never talks to a database or cache directly; it is handed
implementations of these ABCs. All methods are coroutines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from hazardfusion.models.alerts import Alert, AlertStatus
from hazardfusion.models.reports import Report, ReportStatus


class ReportAlertStore(ABC):
    """Read/write access to persisted reports and alerts."""

    @abstractmethod
    async def get_active_alerts(self) -> List[Alert]:
        """Return all ``active`` alerts, highest confidence first, newest first on ties."""

    @abstractmethod
    async def get_recent_reports(self, limit: int) -> List[Report]:
        """Return up to ``limit`` reports, most recent first."""

    @abstractmethod
    async def create_alert(self, alert: Alert) -> Alert:
        """Persist a new alert and return the stored copy."""

    @abstractmethod
    async def update_alert(self, alert: Alert) -> Optional[Alert]:
        """Persist merged fields of an existing alert; None if unknown."""

    @abstractmethod
    async def update_alert_status(self, alert_id: str, status: AlertStatus) -> Optional[Alert]:
        """Change an alert's status; None if unknown."""

    @abstractmethod
    async def update_report_status(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        """Change a report's status; None if unknown."""

    @abstractmethod
    async def add_report(self, report: Report) -> Report:
        """Persist a newly submitted report."""

    @abstractmethod
    async def get_report(self, report_id: str) -> Optional[Report]:
        """Look up one report; None if unknown."""

    @abstractmethod
    async def get_alert(self, alert_id: str) -> Optional[Alert]:
        """Look up one alert; None if unknown."""


class CacheInvalidator(ABC):
    """Fire-and-forget invalidation signals sent after each fusion cycle."""

    @abstractmethod
    async def invalidate_active_alerts(self) -> None:
        """Drop any cached active-alert listing."""

    @abstractmethod
    async def invalidate_dashboard_data(self) -> None:
        """Drop any cached dashboard aggregates."""
