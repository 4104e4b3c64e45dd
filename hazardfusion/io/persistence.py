"""JSON file I/O for HazardFusion store snapshots.

Writes go to a temp file in the target directory and are then renamed over
the destination, so a reader never sees half a snapshot. Snapshot files carry
a ``version`` key alongside the ``reports`` and ``alerts`` arrays.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import tempfile
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from hazardfusion.models.alerts import Alert
from hazardfusion.models.reports import Report

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class _ModelEncoder(json.JSONEncoder):
    """Encodes models via to_dict(), plus plain dataclasses, enums, datetimes and Paths."""

    def default(self, obj: Any) -> Any:
        to_dict = getattr(obj, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def _replace_atomically(target: Path, text: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f"{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
        os.replace(tmp_name, target)
    except OSError as exc:
        os.unlink(tmp_name)
        logger.error("Could not write snapshot to %s: %s", target, exc)
        raise


def save_json(data: Any, path: str | Path, indent: int = 2) -> None:
    """Serialise ``data`` and write it to ``path`` atomically.

    Parent directories are created as needed.

    Raises:
        TypeError: If part of ``data`` is not serialisable.
        OSError: If writing or renaming the temp file fails (it is removed).
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        text = json.dumps(data, indent=indent, ensure_ascii=False, cls=_ModelEncoder)
    except (TypeError, ValueError) as exc:
        logger.error("Cannot serialise data for %s: %s", target, exc)
        raise
    _replace_atomically(target, text)
    logger.debug("Wrote %d bytes to %s", len(text), target)


def load_json(path: str | Path) -> Optional[Any]:
    """Parse a JSON file; None when it is absent or unreadable."""
    source = Path(path)
    if not source.is_file():
        logger.debug("No JSON file at %s", source)
        return None
    try:
        return json.loads(source.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable JSON file %s: %s", source, exc)
        return None


def save_snapshot(reports: Iterable[Report], alerts: Iterable[Alert], path: str | Path) -> None:
    """Write reports and alerts as a versioned store snapshot."""
    save_json(
        {
            "version": SNAPSHOT_VERSION,
            "reports": [r.to_dict() for r in reports],
            "alerts": [a.to_dict() for a in alerts],
        },
        path,
    )


def load_snapshot(path: str | Path) -> Tuple[List[Report], List[Alert]]:
    """Read a store snapshot written by save_snapshot().

    Files without a ``version`` key are read as version 1. A missing or
    unreadable file yields two empty lists.

    Raises:
        ValueError: On an unsupported version or an unknown enum value in a record.
    """
    data = load_json(path)
    if not data:
        return [], []
    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot version {version!r} in {path}")
    reports = [Report.from_dict(r) for r in data.get("reports") or []]
    alerts = [Alert.from_dict(a) for a in data.get("alerts") or []]
    return reports, alerts
