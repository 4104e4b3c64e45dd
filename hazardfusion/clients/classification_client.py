"""Classification collaborator adapter.

The hazard classifier itself is a black box supplied by the caller: any
callable (sync or async) mapping ``(text, media_urls)`` to a mapping with
``hazard_type``, ``severity`` and ``confidence``. This client normalises its
output into a ReportClassification and runs batches in fixed concurrency
windows.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from config.defaults import CLASSIFICATION_CONCURRENCY
from hazardfusion.models.reports import HazardType, ReportClassification, SeverityLevel

logger = logging.getLogger(__name__)

ClassifyFn = Callable[
    [str, Sequence[str]],
    Union[Mapping[str, Any], Awaitable[Mapping[str, Any]]],
]


@dataclass
class ClassificationRequest:
    """One item of a classification batch."""

    id: str
    text: str
    media_urls: List[str] = field(default_factory=list)


def normalize_classification(raw: Optional[Mapping[str, Any]]) -> ReportClassification:
    """Coerce raw classifier output into the closed vocabulary.

    Unknown hazard types become ``other``, unknown severities are dropped, and
    confidence is clamped to [0, 100]. Accepts both snake_case and camelCase
    keys.
    """
    raw = raw or {}
    hazard_raw = raw.get("hazard_type", raw.get("hazardType"))
    severity_raw = raw.get("severity")

    hazard: Optional[HazardType] = None
    if hazard_raw:
        try:
            hazard = HazardType(str(hazard_raw).lower())
        except ValueError:
            hazard = HazardType.OTHER

    severity: Optional[SeverityLevel] = None
    if severity_raw:
        try:
            severity = SeverityLevel(str(severity_raw).lower())
        except ValueError:
            logger.debug("Classifier returned unknown severity %r — ignoring", severity_raw)

    try:
        confidence = float(raw.get("confidence", 0.0))
    except (TypeError, ValueError):
        confidence = 0.0
    if confidence != confidence:  # NaN
        confidence = 0.0
    confidence = min(max(confidence, 0.0), 100.0)

    return ReportClassification(hazard_type=hazard, severity=severity, confidence=confidence)


FAILED_CLASSIFICATION = ReportClassification(
    hazard_type=HazardType.OTHER,
    severity=SeverityLevel.MODERATE,
    confidence=0.0,
)


class ClassificationClient:
    """Runs a caller-supplied classifier over single items or batches.

    Args:
        classify_fn: Sync or async callable ``(text, media_urls) -> mapping``.
        concurrency: Items classified concurrently per batch window.
    """

    def __init__(self, classify_fn: ClassifyFn, concurrency: int = CLASSIFICATION_CONCURRENCY) -> None:
        self._classify_fn = classify_fn
        self.concurrency = max(1, concurrency)

    async def classify(self, text: str, media_urls: Optional[Sequence[str]] = None) -> ReportClassification:
        """Classify one report body. Classifier errors propagate."""
        raw = self._classify_fn(text, list(media_urls or []))
        if inspect.isawaitable(raw):
            raw = await raw
        return normalize_classification(raw)

    async def _classify_safe(self, request: ClassificationRequest) -> ReportClassification:
        try:
            return await self.classify(request.text, request.media_urls)
        except Exception as exc:
            logger.error("Classification failed for report %s: %s", request.id, exc)
            return ReportClassification(
                hazard_type=FAILED_CLASSIFICATION.hazard_type,
                severity=FAILED_CLASSIFICATION.severity,
                confidence=FAILED_CLASSIFICATION.confidence,
            )

    async def classify_batch(
        self, requests: Sequence[ClassificationRequest]
    ) -> Dict[str, ReportClassification]:
        """Classify many items, ``concurrency`` at a time.

        A failing item is logged and mapped to ``other``/``moderate`` with zero
        confidence; it never aborts the batch.

        Returns:
            Mapping of request id to classification, in request order.
        """
        results: Dict[str, ReportClassification] = {}
        for start in range(0, len(requests), self.concurrency):
            window = list(requests[start:start + self.concurrency])
            outcomes = await asyncio.gather(*(self._classify_safe(r) for r in window))
            for request, outcome in zip(window, outcomes):
                results[request.id] = outcome
        logger.info("Classified %d reports (window=%d)", len(results), self.concurrency)
        return results
