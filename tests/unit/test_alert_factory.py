"""Unit tests for hazardfusion.alerts.alert_factory and recommendations."""

from __future__ import annotations

import pytest

from config.settings import FusionConfig
from hazardfusion.alerts.alert_factory import THRESHOLDS_MET, build_summary, create_alert_from_cluster
from hazardfusion.alerts.recommendations import generate_recommendations
from hazardfusion.analysis.clusterer import build_cluster
from hazardfusion.models.alerts import AlertStatus
from hazardfusion.models.reports import HazardType, SeverityLevel
from hazardfusion.models.validation import validate_alert


@pytest.fixture
def miami_cluster(miami_reports):
    return build_cluster(miami_reports)


class TestBuildSummary:
    def test_miami_summary(self, miami_cluster):
        assert build_summary(miami_cluster) == "High storm surge alert: 3 reports in Miami"

    def test_every_underscore_replaced(self, make_report):
        cluster = build_cluster([
            make_report("a", hazard="rip_current", severity="low"),
            make_report("b", hazard="rip_current", severity="low"),
        ])
        assert "rip current" in build_summary(cluster)
        assert "_" not in build_summary(cluster)


class TestCreateAlertFromCluster:
    def test_fields(self, miami_cluster):
        alert = create_alert_from_cluster(miami_cluster)

        assert alert.status == AlertStatus.ACTIVE
        assert alert.hazard_type == HazardType.STORM_SURGE
        assert alert.severity == SeverityLevel.HIGH
        assert alert.confidence == miami_cluster.confidence
        assert alert.related_reports == ["miami-1", "miami-2", "miami-3"]
        assert alert.region.name == "Miami"
        assert alert.region.affected_population == 0
        assert alert.ai_summary == "High storm surge alert: 3 reports in Miami"
        assert alert.incident_id is None

    def test_timestamp_is_incident_time(self, miami_cluster, base_time):
        alert = create_alert_from_cluster(miami_cluster)
        assert alert.timestamp == miami_cluster.start_time == base_time
        assert alert.created_at > base_time
        assert alert.updated_at == alert.created_at

    def test_escalation_reason(self, miami_cluster):
        reason = create_alert_from_cluster(miami_cluster).escalation_reason
        assert reason.report_count == 3
        assert reason.source_types == ["citizen", "social", "official"]
        assert reason.time_window == "1 hours"
        assert reason.geographic_spread == 10.0
        assert reason.thresholds_met == THRESHOLDS_MET
        assert reason.reasoning == "Clustered 3 reports within 10km radius"

    def test_bounds_square_around_centroid(self, miami_cluster):
        ring = create_alert_from_cluster(miami_cluster).region.bounds.coordinates[0]
        lat, lon = miami_cluster.centroid_lat, miami_cluster.centroid_lon
        assert ring[0] == pytest.approx([lon - 0.1, lat - 0.1])
        assert ring[2] == pytest.approx([lon + 0.1, lat + 0.1])
        assert ring[0] == ring[-1]

    def test_custom_radius_in_reasoning(self, miami_reports):
        config = FusionConfig(spatial_radius_km=2.5)
        cluster = build_cluster(miami_reports, config)
        alert = create_alert_from_cluster(cluster, config)
        assert alert.escalation_reason.reasoning == "Clustered 3 reports within 2.5km radius"
        assert alert.escalation_reason.geographic_spread == 2.5

    def test_recommendations_attached(self, miami_cluster):
        alert = create_alert_from_cluster(miami_cluster)
        assert alert.recommendations == generate_recommendations(
            HazardType.STORM_SURGE, SeverityLevel.HIGH
        )
        assert "Evacuate coastal areas immediately" in alert.recommendations

    def test_unique_ids(self, miami_cluster):
        assert create_alert_from_cluster(miami_cluster).id != create_alert_from_cluster(miami_cluster).id

    def test_created_alert_is_valid(self, miami_cluster):
        assert validate_alert(create_alert_from_cluster(miami_cluster)) == []


class TestGenerateRecommendations:
    @pytest.mark.parametrize("hazard", list(HazardType))
    @pytest.mark.parametrize("severity", list(SeverityLevel))
    def test_every_combination_has_advice(self, hazard, severity):
        assert generate_recommendations(hazard, severity)

    def test_returns_copy(self):
        first = generate_recommendations(HazardType.FLOODING, SeverityLevel.HIGH)
        first.append("mutated")
        assert "mutated" not in generate_recommendations(HazardType.FLOODING, SeverityLevel.HIGH)
