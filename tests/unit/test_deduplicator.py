"""Unit tests for hazardfusion.alerts.deduplicator.

Covers:
- find_matching_alert: hazard, region-name and window matching, inactive alerts ignored
- merge_cluster_into_alert: ordered union, max confidence, status untouched
- deduplicate_cluster: new vs. merged decision
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from config.settings import FusionConfig
from hazardfusion.alerts.deduplicator import (
    deduplicate_cluster,
    find_matching_alert,
    merge_cluster_into_alert,
)
from hazardfusion.analysis.clusterer import build_cluster
from hazardfusion.models.alerts import AlertStatus


@pytest.fixture
def flood_cluster(make_report):
    return build_cluster([
        make_report("new-1", minutes=0),
        make_report("new-2", minutes=10),
    ])


class TestFindMatchingAlert:
    def test_recent_same_hazard_same_region_matches(self, flood_cluster, make_alert):
        alert = make_alert(hours_ago=1)
        assert find_matching_alert(flood_cluster, [alert], 48) is alert

    def test_outside_window_does_not_match(self, flood_cluster, make_alert):
        assert find_matching_alert(flood_cluster, [make_alert(hours_ago=49)], 48) is None

    def test_window_boundary_inclusive(self, flood_cluster, make_alert):
        assert find_matching_alert(flood_cluster, [make_alert(hours_ago=48)], 48) is not None

    def test_alert_after_cluster_start_within_window(self, flood_cluster, make_alert):
        assert find_matching_alert(flood_cluster, [make_alert(hours_ago=-5)], 48) is not None

    def test_different_hazard(self, flood_cluster, make_alert):
        assert find_matching_alert(flood_cluster, [make_alert(hazard="erosion")], 48) is None

    def test_region_is_name_equality(self, flood_cluster, make_alert):
        """A neighbouring region name never matches, however close it is."""
        assert find_matching_alert(flood_cluster, [make_alert(region="Miami Beach")], 48) is None

    @pytest.mark.parametrize("status", ["resolved", "false_alarm", "verified"])
    def test_inactive_alerts_ignored(self, flood_cluster, make_alert, status):
        assert find_matching_alert(flood_cluster, [make_alert(status=status)], 48) is None

    def test_first_match_wins(self, flood_cluster, make_alert):
        first = make_alert("a1", hours_ago=2)
        second = make_alert("a2", hours_ago=1)
        assert find_matching_alert(flood_cluster, [first, second], 48) is first


class TestMergeClusterIntoAlert:
    def test_ordered_union_without_duplicates(self, flood_cluster, make_alert):
        alert = make_alert(related=["old-1", "new-1"])
        merged = merge_cluster_into_alert(alert, flood_cluster)
        assert merged.related_reports == ["old-1", "new-1", "new-2"]

    def test_confidence_is_max(self, flood_cluster, make_alert):
        low = make_alert(confidence=10)
        high = make_alert(confidence=99)
        assert merge_cluster_into_alert(low, flood_cluster).confidence == flood_cluster.confidence
        assert merge_cluster_into_alert(high, flood_cluster).confidence == 99

    def test_does_not_mutate_input(self, flood_cluster, make_alert):
        alert = make_alert(related=["old-1"])
        merge_cluster_into_alert(alert, flood_cluster)
        assert alert.related_reports == ["old-1"]

    def test_keeps_identity_and_status(self, flood_cluster, make_alert):
        alert = make_alert("keep-me")
        merged = merge_cluster_into_alert(alert, flood_cluster)
        assert merged.id == "keep-me"
        assert merged.status == AlertStatus.ACTIVE
        assert merged.ai_summary == alert.ai_summary
        assert merged.updated_at >= alert.updated_at


class TestDeduplicateCluster:
    def test_new_alert_when_nothing_matches(self, flood_cluster):
        decision = deduplicate_cluster(flood_cluster, [])
        assert decision.is_new
        assert decision.alert.related_reports == ["new-1", "new-2"]

    def test_merges_into_match(self, flood_cluster, make_alert):
        decision = deduplicate_cluster(flood_cluster, [make_alert("existing", hours_ago=1)])
        assert not decision.is_new
        assert decision.alert.id == "existing"
        assert set(decision.alert.related_reports) >= {"old-1", "old-2", "new-1", "new-2"}

    def test_respects_configured_window(self, flood_cluster, make_alert):
        config = FusionConfig(dedup_window_hours=2)
        decision = deduplicate_cluster(flood_cluster, [make_alert(hours_ago=3)], config)
        assert decision.is_new

    def test_cluster_start_time_is_reference(self, make_report, make_alert):
        """The window is measured from the cluster's earliest report."""
        cluster = build_cluster([
            make_report("x", minutes=0),
            make_report("y", minutes=timedelta(hours=20).total_seconds() / 60),
        ])
        alert = make_alert(hours_ago=47)
        assert not deduplicate_cluster(cluster, [alert]).is_new
