#!/usr/bin/env python3
"""HazardFusion CLI — run one fusion cycle over a JSON store snapshot.

The snapshot holds ``{"reports": [...], "alerts": [...]}``. The cycle's new and
updated alerts and verified report statuses are written back to the snapshot
(or to --output).

Usage:
    python scripts/run_fusion.py --snapshot data/store.json
    python scripts/run_fusion.py --snapshot data/store.json --output out.json --broadcast
    python scripts/run_fusion.py --snapshot data/store.json --min-confidence 55 --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on sys.path for consistent import resolution
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config.defaults import (  # noqa: E402
    CLUSTER_SPATIAL_RADIUS_KM,
    CLUSTER_TEMPORAL_WINDOW_HOURS,
    DEDUP_WINDOW_HOURS,
    DEFAULT_LOG_LEVEL,
    MIN_CONFIDENCE_FOR_ALERT,
    RECENT_REPORT_LIMIT,
)
from config.settings import FusionConfig  # noqa: E402
from hazardfusion.analysis.priority import sort_alerts_by_priority  # noqa: E402
from hazardfusion.engine import FusionEngine  # noqa: E402
from hazardfusion.errors import FusionCycleError  # noqa: E402
from hazardfusion.realtime.broadcast import messages_for_fusion_result  # noqa: E402
from hazardfusion.store.memory_store import InMemoryCache, InMemoryStore  # noqa: E402
from hazardfusion.utils.logging_utils import configure_logging  # noqa: E402

logger = logging.getLogger("hazardfusion.cli")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argparse argument parser with the tunable FusionConfig fields as flags."""
    parser = argparse.ArgumentParser(
        prog="run_fusion",
        description="HazardFusion — fuse pending hazard reports into alerts",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--snapshot", type=str, default=None,
        help="JSON store snapshot to read (defaults to $FUSION_SNAPSHOT_PATH)",
    )
    parser.add_argument(
        "--output", type=str, default=None,
        help="Where to write the updated snapshot (defaults to --snapshot)",
    )
    parser.add_argument(
        "--limit", type=int, default=RECENT_REPORT_LIMIT,
        help="Number of most recent reports considered",
    )
    parser.add_argument(
        "--radius-km", type=float, default=CLUSTER_SPATIAL_RADIUS_KM,
        help="Clustering radius in kilometres",
    )
    parser.add_argument(
        "--window-hours", type=float, default=CLUSTER_TEMPORAL_WINDOW_HOURS,
        help="Clustering time window in hours",
    )
    parser.add_argument(
        "--dedup-window-hours", type=float, default=DEDUP_WINDOW_HOURS,
        help="Alert deduplication window in hours",
    )
    parser.add_argument(
        "--min-confidence", type=float, default=MIN_CONFIDENCE_FOR_ALERT,
        help="Minimum cluster confidence required to raise an alert",
    )
    parser.add_argument(
        "--broadcast", action="store_true",
        help="Print the broadcast envelopes the cycle would emit",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Run the cycle but do not write the snapshot back",
    )
    parser.add_argument(
        "--log-level", type=str, default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> FusionConfig:
    """Build a FusionConfig from parsed CLI arguments."""
    config = FusionConfig(
        spatial_radius_km=args.radius_km,
        temporal_window_hours=args.window_hours,
        dedup_window_hours=args.dedup_window_hours,
        min_confidence_for_alert=args.min_confidence,
        recent_report_limit=args.limit,
        log_level=args.log_level,
    )
    if args.snapshot:
        config.snapshot_path = args.snapshot
    return config


async def _run(config: FusionConfig, output: Optional[str], dry_run: bool, broadcast: bool) -> int:
    store = InMemoryStore.from_snapshot(config.snapshot_path)
    engine = FusionEngine(store, InMemoryCache(), config)

    try:
        result = await engine.run_fusion_cycle()
    except FusionCycleError as exc:
        logger.error("%s", exc)
        return 1

    active = sort_alerts_by_priority(await store.get_active_alerts())
    print(
        f"clusters={len(result.clusters)} new_alerts={len(result.new_alerts)} "
        f"updated_alerts={len(result.updated_alerts)} "
        f"processed_reports={len(result.processed_report_ids)} "
        f"skipped_clusters={len(result.skipped_cluster_ids)}"
    )
    for alert in active:
        print(f"  [{alert.severity.value:>8}] {alert.confidence:>5.0f}  {alert.ai_summary}")

    if broadcast:
        for message in messages_for_fusion_result(result):
            print(json.dumps({"channels": message.channels, **message.to_dict()}, default=str))

    if not dry_run:
        store.snapshot(output or config.snapshot_path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(log_level=args.log_level)

    config = config_from_args(args)
    if not config.snapshot_path:
        parser.error("--snapshot is required when FUSION_SNAPSHOT_PATH is not set")

    return asyncio.run(_run(config, args.output, args.dry_run, args.broadcast))


if __name__ == "__main__":
    sys.exit(main())
