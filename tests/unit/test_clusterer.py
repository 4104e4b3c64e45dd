"""Unit tests for hazardfusion.analysis.clusterer.

Covers:
- are_reports_related: radius, window and hazard compatibility
- cluster_reports: isolated reports, Miami scenario, one-hop (non-transitive)
  expansion, hazard separation, a clustered neighbour still seeding its own
  cluster, each report a neighbour at most once and a seed at most once
- build_cluster: centroid, dominant hazard and region, time span
"""

from __future__ import annotations

import pytest

from config.settings import FusionConfig
from hazardfusion.analysis.clusterer import (
    are_reports_related,
    build_cluster,
    cluster_reports,
    hazard_types_compatible,
)
from hazardfusion.models.reports import HazardType, SeverityLevel

# ~0.0809 degrees of latitude is 9 km
_NINE_KM_LAT = 9.0 / 111.195


class TestAreReportsRelated:
    def test_close_in_space_and_time(self, make_report):
        a = make_report("a", 25.7617, -80.1918, 0)
        b = make_report("b", 25.7620, -80.1920, 30)
        assert are_reports_related(a, b)

    def test_outside_radius(self, make_report):
        a = make_report("a", 25.0, -80.0)
        b = make_report("b", 25.0 + 11.0 / 111.195, -80.0)
        assert not are_reports_related(a, b)

    def test_outside_window(self, make_report):
        a = make_report("a", minutes=0)
        b = make_report("b", minutes=24 * 60 + 1)
        assert not are_reports_related(a, b)

    def test_window_boundary_is_inclusive(self, make_report):
        a = make_report("a", minutes=0)
        b = make_report("b", minutes=24 * 60)
        assert are_reports_related(a, b)

    def test_different_hazards_never_related(self, make_report):
        a = make_report("a", hazard="flooding")
        b = make_report("b", hazard="erosion")
        assert not are_reports_related(a, b)

    def test_unclassified_is_compatible(self, make_report):
        a = make_report("a", hazard="flooding")
        b = make_report("b", hazard=None)
        assert hazard_types_compatible(a, b)
        assert are_reports_related(a, b)

    def test_custom_radius(self, make_report):
        a = make_report("a", 25.0, -80.0)
        b = make_report("b", 25.0 + 11.0 / 111.195, -80.0)
        assert are_reports_related(a, b, FusionConfig(spatial_radius_km=15.0))


class TestClusterReports:
    def test_empty(self):
        assert cluster_reports([]) == []

    def test_isolated_report_forms_no_cluster(self, make_report):
        assert cluster_reports([make_report("solo")]) == []

    def test_flooding_pair_thirty_minutes_apart(self, make_report):
        reports = [
            make_report("a", 25.7617, -80.1918, 0, source="official"),
            make_report("b", 25.7620, -80.1920, 30, source="citizen"),
        ]
        clusters = cluster_reports(reports)
        assert len(clusters) == 1
        assert clusters[0].report_ids == ["a", "b"]
        assert clusters[0].hazard_type == HazardType.FLOODING

    def test_miami_scenario(self, miami_reports):
        clusters = cluster_reports(miami_reports)
        assert len(clusters) == 1
        cluster = clusters[0]
        assert cluster.size == 3
        assert cluster.region == "Miami"
        assert cluster.hazard_type == HazardType.STORM_SURGE
        assert cluster.severity == SeverityLevel.HIGH
        assert cluster.confidence == 83

    def test_hazards_kept_apart(self, make_report):
        reports = [
            make_report("f1", hazard="flooding", minutes=0),
            make_report("f2", hazard="flooding", minutes=10),
            make_report("e1", hazard="erosion", minutes=5),
            make_report("e2", hazard="erosion", minutes=15),
        ]
        clusters = cluster_reports(reports)
        assert [c.report_ids for c in clusters] == [["f1", "f2"], ["e1", "e2"]]
        for c in clusters:
            assert len({r.classification.hazard_type for r in c.reports}) == 1

    def test_chain_neighbour_seeds_its_own_cluster(self, make_report):
        """A-B and B-C are within 9 km but A-C is 18 km: B joins A, then seeds B-C."""
        a = make_report("a", 25.0, -80.0)
        b = make_report("b", 25.0 + _NINE_KM_LAT, -80.0)
        c = make_report("c", 25.0 + 2 * _NINE_KM_LAT, -80.0)
        clusters = cluster_reports([a, b, c])
        assert [cl.report_ids for cl in clusters] == [["a", "b"], ["b", "c"]]

    def test_middle_seed_takes_both_sides(self, make_report):
        a = make_report("a", 25.0, -80.0)
        b = make_report("b", 25.0 + _NINE_KM_LAT, -80.0)
        c = make_report("c", 25.0 + 2 * _NINE_KM_LAT, -80.0)
        clusters = cluster_reports([b, a, c])
        assert len(clusters) == 1
        assert clusters[0].report_ids == ["b", "a", "c"]

    def test_every_member_related_to_seed(self, make_report):
        reports = [make_report(f"r{i}", 25.0 + i * 0.02, -80.0, minutes=i * 60) for i in range(8)]
        for cluster in cluster_reports(reports):
            seed = cluster.reports[0]
            for member in cluster.reports[1:]:
                assert are_reports_related(seed, member)

    def test_report_is_neighbour_once_and_seed_once(self, make_report):
        reports = [make_report(f"r{i}", 25.0 + i * 0.05, -80.0, minutes=i * 30) for i in range(10)]
        clusters = cluster_reports(reports)
        seeds = [c.report_ids[0] for c in clusters]
        neighbours = [rid for c in clusters for rid in c.report_ids[1:]]
        assert len(seeds) == len(set(seeds))
        assert len(neighbours) == len(set(neighbours))
        assert set(seeds) | set(neighbours) == {r.id for r in reports}

    def test_min_reports_for_alert(self, make_report):
        reports = [make_report("a"), make_report("b", minutes=5)]
        assert cluster_reports(reports, FusionConfig(min_reports_for_alert=3)) == []


class TestBuildCluster:
    def test_empty_raises(self):
        with pytest.raises(ValueError):
            build_cluster([])

    def test_derived_fields(self, make_report):
        reports = [
            make_report("a", 10.0, 20.0, 0, region="Keys", hazard="flooding"),
            make_report("b", 10.02, 20.02, 90, region="Keys", hazard=None),
            make_report("c", 10.04, 20.04, 60, region="Marathon", hazard="flooding"),
        ]
        cluster = build_cluster(reports)
        assert cluster.centroid_lat == pytest.approx(10.02)
        assert cluster.centroid_lon == pytest.approx(20.02)
        assert cluster.region == "Keys"
        assert cluster.hazard_type == HazardType.FLOODING
        assert cluster.start_time == reports[0].timestamp
        assert cluster.end_time == reports[1].timestamp
        assert cluster.confidence_result is not None
        assert cluster.confidence == cluster.confidence_result.overall

    def test_region_tie_goes_to_first_seen(self, make_report):
        reports = [make_report("a", region="North"), make_report("b", region="South")]
        assert build_cluster(reports).region == "North"

    def test_all_unclassified_hazard_is_other(self, make_report):
        reports = [make_report("a", hazard=None), make_report("b", hazard=None)]
        assert build_cluster(reports).hazard_type == HazardType.OTHER
