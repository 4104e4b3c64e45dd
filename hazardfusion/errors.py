"""Exceptions raised by HazardFusion."""

from __future__ import annotations


class FusionCycleError(RuntimeError):
    """A fusion cycle aborted because a store or cache call failed.

    The original collaborator exception is chained as ``__cause__``. Work
    already committed before the failure is not rolled back; reports not yet
    marked verified stay pending and are picked up by the next cycle.
    """

    def __init__(self, cycle_id: str, message: str) -> None:
        super().__init__(f"Fusion cycle {cycle_id} failed: {message}")
        self.cycle_id = cycle_id
