#!/usr/bin/env python3
"""
Logging setup driven by the `logging` section of the merged config.
"""

import logging
from typing import Any, Dict

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def resolve_level(config: Dict[str, Any]) -> int:
    """Map `config['logging']['level']` to a logging level; unknown names fall back to INFO."""
    raw = str((config.get("logging") or {}).get("level", "INFO")).strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: Dict[str, Any]) -> None:
    """Configure the root logger once for CLI use."""
    logging.basicConfig(level=resolve_level(config), format=LOG_FORMAT)
