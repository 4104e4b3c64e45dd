"""Severity derivation from per-report severities and composite confidence."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Sequence

from hazardfusion.models.reports import Report, SeverityLevel


def determine_severity(reports: Sequence[Report], confidence: float) -> SeverityLevel:
    """Derive a cluster severity by weighted voting with a confidence gate.

    Reports without a classified severity vote ``moderate``.

    Args:
        reports: Cluster members.
        confidence: Composite cluster confidence (0–100).

    Returns:
        The derived SeverityLevel. An empty input yields ``moderate``.
    """
    n = len(reports)
    if n == 0:
        return SeverityLevel.MODERATE

    counts: Dict[SeverityLevel, int] = defaultdict(int)
    for r in reports:
        counts[r.classification.severity or SeverityLevel.MODERATE] += 1
    high = counts[SeverityLevel.HIGH]
    moderate = counts[SeverityLevel.MODERATE]
    low = counts[SeverityLevel.LOW]

    if high >= n * 0.3 and confidence >= 60:
        return SeverityLevel.HIGH
    if high + moderate >= n * 0.5:
        return SeverityLevel.HIGH if confidence >= 70 else SeverityLevel.MODERATE
    if low >= n * 0.7:
        return SeverityLevel.LOW
    return SeverityLevel.MODERATE
