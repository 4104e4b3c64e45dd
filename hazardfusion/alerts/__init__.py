"""HazardFusion alerts package — alert creation, deduplication and recommendations."""

from hazardfusion.alerts.alert_factory import build_summary, create_alert_from_cluster
from hazardfusion.alerts.deduplicator import (
    DedupDecision,
    deduplicate_cluster,
    find_matching_alert,
    merge_cluster_into_alert,
)
from hazardfusion.alerts.recommendations import generate_recommendations

__all__ = [
    "create_alert_from_cluster",
    "build_summary",
    "DedupDecision",
    "deduplicate_cluster",
    "find_matching_alert",
    "merge_cluster_into_alert",
    "generate_recommendations",
]
