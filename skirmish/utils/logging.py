"""Logging configuration: console output plus an optional per-run log file."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"


def log_file_path(log_dir: str | Path, base_name: str = "game", now: datetime | None = None) -> Path:
    """``<log_dir>/<base_name>_YYYYmmdd_HHMMSS.log``"""
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(log_dir) / f"{base_name}_{stamp}.log"


def setup_logging(level: str = "INFO", log_dir: str | Path | None = None) -> Path | None:
    """Configure the root logger.  Returns the log file path, if one was opened."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    root.addHandler(handler)

    if log_dir is None:
        return None

    path = log_file_path(log_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)
    logging.getLogger(__name__).info("=== Logging started: %s ===", path)
    return path
