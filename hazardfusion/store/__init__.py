"""HazardFusion store package — collaborator interfaces and in-memory implementations."""

from hazardfusion.store.base import CacheInvalidator, ReportAlertStore
from hazardfusion.store.memory_store import InMemoryCache, InMemoryStore

__all__ = [
    "ReportAlertStore",
    "CacheInvalidator",
    "InMemoryStore",
    "InMemoryCache",
]
