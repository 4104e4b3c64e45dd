"""HazardFusion clients package — adapters around upstream collaborators."""

from hazardfusion.clients.classification_client import (
    ClassificationClient,
    ClassificationRequest,
    normalize_classification,
)

__all__ = [
    "ClassificationClient",
    "ClassificationRequest",
    "normalize_classification",
]
