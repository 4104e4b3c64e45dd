"""HazardFusion engine — drives one fusion cycle over pending reports.

Cycle state machine:
  IDLE → CLUSTERING → SCORING → DEDUPLICATING → PERSISTING → IDLE

  CLUSTERING     group pending reports into spatio-temporal clusters
  SCORING        drop clusters below min_confidence_for_alert (members stay pending)
  DEDUPLICATING  merge each remaining cluster into a matching active alert, or
                 materialise a new one
  PERSISTING     write the alert, mark member reports verified, and finally
                 invalidate the active-alert and dashboard caches

Cycles are single-flight: the engine holds an asyncio.Lock for the whole cycle,
so two overlapping invocations on the same engine can never both miss the
same active alert and raise duplicates. Share one engine per process.

Usage:
    from config.settings import FusionConfig
    from hazardfusion.engine import FusionEngine
    from hazardfusion.store import InMemoryCache, InMemoryStore

    engine = FusionEngine(InMemoryStore(), InMemoryCache(), FusionConfig())
    result = asyncio.run(engine.run_fusion_cycle())
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import List, Optional, Sequence

from config.settings import FusionConfig
from hazardfusion.alerts.deduplicator import deduplicate_cluster
from hazardfusion.analysis.clusterer import cluster_reports
from hazardfusion.errors import FusionCycleError
from hazardfusion.models.alerts import Alert
from hazardfusion.models.fusion import FusionPhase, FusionResult, PhaseRecord, ReportCluster
from hazardfusion.models.reports import Report, ReportStatus
from hazardfusion.store.base import CacheInvalidator, ReportAlertStore
from hazardfusion.utils.date_utils import utcnow
from hazardfusion.utils.logging_utils import CycleContextAdapter, get_cycle_logger

logger = logging.getLogger(__name__)


def _make_cycle_id() -> str:
    return str(uuid.uuid4())[:12]


def _replace_by_id(alerts: List[Alert], alert: Alert) -> bool:
    for idx, existing in enumerate(alerts):
        if existing.id == alert.id:
            alerts[idx] = alert
            return True
    return False


class FusionEngine:
    """Fusion orchestrator bound to a store and a cache.

    Args:
        store: Report/alert repository.
        cache: Cache invalidation collaborator.
        config: Thresholds and weights (defaults if omitted).
    """

    def __init__(
        self,
        store: ReportAlertStore,
        cache: CacheInvalidator,
        config: Optional[FusionConfig] = None,
    ) -> None:
        self.store = store
        self.cache = cache
        self.config = config or FusionConfig()
        self._cycle_lock = asyncio.Lock()
        self.state = FusionPhase.IDLE

    @property
    def busy(self) -> bool:
        return self._cycle_lock.locked()

    async def process_reports(self, reports: Sequence[Report]) -> FusionResult:
        """Run one fusion cycle over the given reports.

        Only reports with status ``pending`` are considered; with none, an
        empty result is returned and no collaborator is called.

        Raises:
            FusionCycleError: If any store or cache call fails.
        """
        async with self._cycle_lock:
            return await self._run_cycle(list(reports))

    async def run_fusion_cycle(self, limit: Optional[int] = None) -> FusionResult:
        """Pull the most recent reports from the store and fuse the pending ones.

        Args:
            limit: Number of recent reports to fetch (defaults to
                config.recent_report_limit).

        Raises:
            FusionCycleError: If any store or cache call fails.
        """
        limit = self.config.recent_report_limit if limit is None else limit
        cycle_id = _make_cycle_id()
        async with self._cycle_lock:
            try:
                recent = await self.store.get_recent_reports(limit)
            except Exception as exc:
                logger.exception("Fusion cycle %s: failed to load recent reports: %s", cycle_id, exc)
                raise FusionCycleError(cycle_id, f"get_recent_reports failed: {exc}") from exc
            pending = [r for r in recent if r.status == ReportStatus.PENDING]
            return await self._run_cycle(pending, cycle_id)

    # ── Cycle internals ──────────────────────────────────────────────────────

    def _enter(self, result: FusionResult, phase: FusionPhase) -> PhaseRecord:
        self.state = phase
        record = PhaseRecord(phase=phase, start_time=utcnow())
        result.phase_log.append(record)
        return record

    @staticmethod
    def _leave(record: PhaseRecord, status: str = "OK") -> None:
        record.end_time = utcnow()
        record.status = status

    async def _run_cycle(
        self, reports: List[Report], cycle_id: Optional[str] = None
    ) -> FusionResult:
        cycle_id = cycle_id or _make_cycle_id()
        log = get_cycle_logger(__name__, cycle_id)
        result = FusionResult(cycle_id=cycle_id)

        pending = [r for r in reports if r.status == ReportStatus.PENDING]
        if not pending:
            log.debug("No pending reports to process")
            return result

        record: Optional[PhaseRecord] = None
        try:
            record = self._enter(result, FusionPhase.CLUSTERING)
            clusters = cluster_reports(pending, self.config)
            result.clusters = clusters
            self._leave(record)
            log.info("Created %d clusters from %d pending reports", len(clusters), len(pending))

            record = self._enter(result, FusionPhase.SCORING)
            eligible: List[ReportCluster] = []
            for cluster in clusters:
                if cluster.confidence < self.config.min_confidence_for_alert:
                    log.debug(
                        "Cluster %s below confidence threshold (%s < %s)",
                        cluster.id, cluster.confidence, self.config.min_confidence_for_alert,
                    )
                    result.skipped_cluster_ids.append(cluster.id)
                else:
                    eligible.append(cluster)
            self._leave(record)

            for cluster in eligible:
                record = self._enter(result, FusionPhase.DEDUPLICATING)
                active_alerts = await self.store.get_active_alerts()
                decision = deduplicate_cluster(cluster, active_alerts, self.config)
                self._leave(record)

                record = self._enter(result, FusionPhase.PERSISTING)
                await self._persist_decision(result, cluster, decision.alert, decision.is_new, log)
                await self._mark_verified(result, cluster)
                self._leave(record)

            record = self._enter(result, FusionPhase.PERSISTING)
            await self.cache.invalidate_active_alerts()
            await self.cache.invalidate_dashboard_data()
            self._leave(record)
            record = None
        except Exception as exc:
            if record is not None:
                self._leave(record, status="FAILED")
            log.exception("Fusion cycle aborted: %s", exc)
            raise FusionCycleError(cycle_id, str(exc)) from exc
        finally:
            self.state = FusionPhase.IDLE

        log.info(
            "Cycle complete | clusters=%d new_alerts=%d updated_alerts=%d "
            "processed=%d skipped=%d",
            len(result.clusters),
            len(result.new_alerts),
            len(result.updated_alerts),
            len(result.processed_report_ids),
            len(result.skipped_cluster_ids),
        )
        return result

    async def _persist_decision(
        self,
        result: FusionResult,
        cluster: ReportCluster,
        alert: Alert,
        is_new: bool,
        log: CycleContextAdapter,
    ) -> None:
        if is_new:
            stored = await self.store.create_alert(alert)
            result.new_alerts.append(stored)
            log.info(
                "Created alert %s for %s in %s (confidence=%s)",
                stored.id, stored.hazard_type.value, stored.region.name, stored.confidence,
            )
            return

        stored = await self.store.update_alert(alert) or alert
        # An alert raised earlier in this same cycle stays a "new" alert
        if not _replace_by_id(result.new_alerts, stored):
            if not _replace_by_id(result.updated_alerts, stored):
                result.updated_alerts.append(stored)
        log.info(
            "Updated alert %s with %d reports from cluster %s",
            stored.id, cluster.size, cluster.id,
        )

    async def _mark_verified(self, result: FusionResult, cluster: ReportCluster) -> None:
        for report in cluster.reports:
            # A cluster seed may already have been verified as a neighbour earlier this cycle
            if report.id in result.processed_report_ids:
                continue
            await self.store.update_report_status(report.id, ReportStatus.VERIFIED)
            report.status = ReportStatus.VERIFIED
            result.processed_report_ids.append(report.id)
