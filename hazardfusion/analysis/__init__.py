"""HazardFusion analysis package.

Pure scoring and clustering functions; no I/O.
"""

from hazardfusion.analysis.clusterer import are_reports_related, build_cluster, cluster_reports
from hazardfusion.analysis.confidence_scorer import calculate_confidence_score
from hazardfusion.analysis.priority import calculate_alert_priority, sort_alerts_by_priority
from hazardfusion.analysis.severity import determine_severity

__all__ = [
    "calculate_confidence_score",
    "determine_severity",
    "calculate_alert_priority",
    "sort_alerts_by_priority",
    "are_reports_related",
    "build_cluster",
    "cluster_reports",
]
