"""HazardFusion I/O package.

File read/write operations only; no fusion logic in this layer.
"""

from hazardfusion.io.persistence import (
    SNAPSHOT_VERSION,
    load_json,
    load_snapshot,
    save_json,
    save_snapshot,
)

__all__ = [
    "SNAPSHOT_VERSION",
    "save_json",
    "load_json",
    "save_snapshot",
    "load_snapshot",
]
