"""Unit tests for hazardfusion.models dataclasses.

Covers:
- Enum normalisation in __post_init__
- from_dict tolerance (lat/lon aliases, defaults) and to_dict shape
- Alert.related_reports behaves as an ordered set
- FusionResult and PhaseRecord helpers
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from hazardfusion.models.alerts import Alert, AlertStatus
from hazardfusion.models.fusion import FusionPhase, FusionResult, PhaseRecord
from hazardfusion.models.reports import (
    GeoLocation,
    HazardType,
    Report,
    ReportStatus,
    SourceType,
)


class TestReport:
    def test_post_init_normalises(self):
        report = Report(
            id="r1",
            timestamp="2024-03-10T08:00:00-04:00",
            location=GeoLocation(25.0, -80.0),
            source="official",
            status="verified",
        )
        assert report.source == SourceType.OFFICIAL
        assert report.status == ReportStatus.VERIFIED
        assert report.timestamp.hour == 12

    def test_unknown_source_rejected(self):
        with pytest.raises(ValueError):
            Report(id="r1", timestamp="2024-03-10T12:00:00Z",
                   location=GeoLocation(0, 0), source="carrier_pigeon")

    def test_from_dict_minimal(self):
        report = Report.from_dict({
            "id": 7,
            "timestamp": "2024-03-10T12:00:00Z",
            "location": {"lat": 25.1, "lon": -80.2},
        })
        assert report.id == "7"
        assert report.location.latitude == 25.1
        assert report.source == SourceType.CITIZEN
        assert report.status == ReportStatus.PENDING
        assert report.classification.hazard_type is None

    def test_to_dict_is_json_ready(self, make_report):
        data = make_report("r1", media=1).to_dict()
        assert data["source"] == "citizen"
        assert data["classification"]["hazard_type"] == "flooding"
        assert isinstance(data["timestamp"], str)
        assert len(data["content"]["media_files"]) == 1

    def test_from_dict_round_trip(self, make_report):
        original = make_report("r1", hazard="tsunami", severity="high", media=2)
        restored = Report.from_dict(original.to_dict())
        assert restored.classification.hazard_type == HazardType.TSUNAMI
        assert restored.media_count == 2
        assert restored.timestamp == original.timestamp


class TestAlert:
    def test_related_reports_deduplicated_in_order(self, make_alert):
        alert = make_alert(related=["b", "a", "b", "c", "a"])
        assert alert.related_reports == ["b", "a", "c"]

    def test_is_active(self, make_alert):
        assert make_alert().is_active
        assert not make_alert(status="resolved").is_active

    def test_round_trip(self, make_alert):
        original = make_alert(status="false_alarm")
        restored = Alert.from_dict(original.to_dict())
        assert restored.status == AlertStatus.FALSE_ALARM
        assert restored.region.bounds.coordinates == original.region.bounds.coordinates
        assert restored.escalation_reason == original.escalation_reason


class TestFusionResult:
    def test_empty(self):
        result = FusionResult(cycle_id="c1")
        assert result.is_empty
        assert result.to_dict()["cycle_id"] == "c1"

    def test_phase_record_elapsed(self, base_time):
        record = PhaseRecord(phase=FusionPhase.CLUSTERING, start_time=base_time)
        assert record.elapsed_seconds == 0.0
        record.end_time = base_time + timedelta(seconds=2.5)
        assert record.elapsed_seconds == pytest.approx(2.5)
