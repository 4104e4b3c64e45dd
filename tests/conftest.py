"""Shared pytest fixtures for HazardFusion tests.

- Fixture data lives in tests/fixtures/ as static JSON files
- make_report / make_alert build model objects with sensible defaults
- Store and cache fixtures are the in-memory implementations; nothing touches
  a real database, cache server or network
- Async code is driven with asyncio.run() inside plain test functions
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List

import pytest

_FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Reference instant for report timestamps, a few hours back so alert recency
# boosts and created_at ordering behave as they would for live reports.
BASE_TIME = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0) - timedelta(hours=6)


# ── Raw fixture data loaders ─────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def sample_snapshot_raw() -> Dict[str, Any]:
    """Store snapshot: three Miami storm-surge reports, one Tampa report, one verified flood report."""
    with open(_FIXTURES_DIR / "sample_reports.json", encoding="utf-8") as f:
        return json.load(f)


# ── Model object factories ───────────────────────────────────────────────────────

@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def make_report():
    """Factory building a pending Report; keyword overrides for every field that matters.

    Usage:
        r = make_report("r1", lat=25.76, lon=-80.19, minutes=30, hazard="flooding")
    """
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

    def _make(
        report_id: str,
        lat: float = 25.7617,
        lon: float = -80.1918,
        minutes: float = 0.0,
        source: str = "citizen",
        hazard: str | None = "flooding",
        severity: str | None = "moderate",
        confidence: float = 75.0,
        region: str = "Miami",
        media: int = 0,
        status: str = "pending",
        text: str = "Water is rising in the street",
    ) -> Report:
        return Report(
            id=report_id,
            timestamp=BASE_TIME + timedelta(minutes=minutes),
            location=GeoLocation(latitude=lat, longitude=lon),
            source=SourceType(source),
            classification=ReportClassification(
                hazard_type=HazardType(hazard) if hazard else None,
                severity=SeverityLevel(severity) if severity else None,
                confidence=confidence,
            ),
            status=ReportStatus(status),
            region=region,
            content=ReportContent(
                original_text=text,
                media_files=[
                    MediaFile(id=f"{report_id}-m{i}", file_name=f"photo_{i}.jpg")
                    for i in range(media)
                ],
            ),
        )

    return _make


@pytest.fixture
def make_alert():
    """Factory building an active Alert in Miami, ``hours_ago`` before BASE_TIME."""
    from hazardfusion.models.alerts import (
        Alert,
        AlertRegion,
        AlertStatus,
        EscalationReason,
        GeoPolygon,
    )
    from hazardfusion.models.reports import HazardType, SeverityLevel
    from hazardfusion.utils.geo_utils import bounding_square

    def _make(
        alert_id: str = "alert-1",
        hazard: str = "flooding",
        region: str = "Miami",
        hours_ago: float = 1.0,
        confidence: float = 60.0,
        severity: str = "moderate",
        status: str = "active",
        related: List[str] | None = None,
        report_count: int = 2,
    ) -> Alert:
        return Alert(
            id=alert_id,
            timestamp=BASE_TIME - timedelta(hours=hours_ago),
            region=AlertRegion(
                name=region,
                bounds=GeoPolygon(coordinates=bounding_square(25.7617, -80.1918, 0.1)),
            ),
            hazard_type=HazardType(hazard),
            severity=SeverityLevel(severity),
            confidence=confidence,
            escalation_reason=EscalationReason(
                report_count=report_count,
                source_types=["citizen"],
                time_window="1 hours",
                geographic_spread=10.0,
                thresholds_met=["minimum_reports", "confidence_threshold"],
                reasoning=f"Clustered {report_count} reports within 10km radius",
            ),
            related_reports=list(related or ["old-1", "old-2"]),
            status=AlertStatus(status),
            ai_summary=f"Moderate {hazard} alert: {report_count} reports in {region}",
        )

    return _make


@pytest.fixture
def miami_reports(make_report):
    """Three corroborating storm-surge reports from three source types within 40 minutes."""
    return [
        make_report("miami-1", 25.7617, -80.1918, 0, "citizen", "storm_surge", "high", 85, media=2),
        make_report("miami-2", 25.7620, -80.1920, 20, "social", "storm_surge", "high", 90),
        make_report("miami-3", 25.7630, -80.1910, 40, "official", "storm_surge", "high", 80),
    ]


# ── Config, store and cache fixtures ─────────────────────────────────────────────

@pytest.fixture
def fusion_config():
    """Default FusionConfig with logging kept quiet."""
    from config.settings import FusionConfig

    return FusionConfig(log_level="WARNING", snapshot_path=None)


@pytest.fixture
def memory_store():
    from hazardfusion.store.memory_store import InMemoryStore

    return InMemoryStore()


@pytest.fixture
def memory_cache():
    from hazardfusion.store.memory_store import InMemoryCache

    return InMemoryCache()


@pytest.fixture
def engine(memory_store, memory_cache, fusion_config):
    """FusionEngine wired to the in-memory store and cache."""
    from hazardfusion.engine import FusionEngine

    return FusionEngine(memory_store, memory_cache, fusion_config)
