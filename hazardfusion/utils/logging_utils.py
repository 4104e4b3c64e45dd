"""Logging setup for HazardFusion.

Every module logs through ``logging.getLogger(__name__)``, which puts it under
the ``hazardfusion`` hierarchy. configure_logging() is called once by entry
points (the CLI, a host application); library code never configures handlers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional

import yaml

ROOT_LOGGER_NAME = "hazardfusion"

DEFAULT_LOGGING_CONFIG = Path(__file__).resolve().parents[2] / "config" / "logging.yaml"

_FALLBACK_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _with_level(cfg: Dict[str, Any], level: str) -> Dict[str, Any]:
    for logger_cfg in (cfg.get("loggers") or {}).values():
        logger_cfg["level"] = level
    return cfg


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
) -> None:
    """Apply the dictConfig in config/logging.yaml.

    Args:
        config_path: Alternative YAML file. When it does not exist,
            logging.basicConfig() is used instead.
        log_level: Level forced onto every configured logger (e.g. "DEBUG").
    """
    path = Path(config_path) if config_path else DEFAULT_LOGGING_CONFIG
    level = log_level.upper() if log_level else None

    if not path.is_file():
        logging.basicConfig(level=getattr(logging, level or "INFO", logging.INFO), format=_FALLBACK_FORMAT)
        return

    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if level:
        cfg = _with_level(cfg, level)
    logging.config.dictConfig(cfg)


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, placed under 'hazardfusion' unless it already is."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class CycleContextAdapter(logging.LoggerAdapter):
    """Tags each record with the fusion cycle it belongs to.

    The cycle id is prepended to the message and also set as the
    ``cycle_id`` record attribute for formatters that want it as a field.

        log = get_cycle_logger("engine", "3f2a9c1b7d40")
        log.info("Created %d clusters", 2)
        # ... hazardfusion.engine: [3f2a9c1b7d40] Created 2 clusters
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        cycle_id = self.extra.get("cycle_id", "-")
        kwargs.setdefault("extra", {})["cycle_id"] = cycle_id
        return f"[{cycle_id}] {msg}", kwargs


def get_cycle_logger(name: str, cycle_id: str) -> CycleContextAdapter:
    """Adapter over get_logger(name) bound to one fusion cycle."""
    return CycleContextAdapter(get_logger(name), {"cycle_id": cycle_id})
