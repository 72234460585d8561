"""Startup checks for the directories and log file a pass relies on."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import BootstrapError

logger = logging.getLogger(__name__)


def _ensure_dir(path: Path, label: str) -> None:
    if path.is_dir():
        return
    if path.exists():
        raise BootstrapError(path, f"{label} exists but is not a directory")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BootstrapError(path, exc.strerror or str(exc)) from exc
    logger.info("%s %s didn't exist, one was created", label, path)


def ensure_directories(source: Path, replica: Path, log_path: Path) -> None:
    """Create the source, replica, and log locations when missing.

    Args:
        source: Source directory.
        replica: Replica directory.
        log_path: Audit log file; its parent directory and an empty file
            are created as needed.

    Raises:
        BootstrapError: If a location exists with the wrong type or cannot
            be created.
    """
    _ensure_dir(source, "Source directory")
    _ensure_dir(replica, "Replica directory")
    if log_path.parent != Path("."):
        _ensure_dir(log_path.parent, "Log directory")

    if log_path.is_dir():
        raise BootstrapError(log_path, "log file path is a directory")
    if not log_path.exists():
        try:
            log_path.touch()
        except OSError as exc:
            raise BootstrapError(log_path, exc.strerror or str(exc)) from exc
        logger.info("Log file %s didn't exist, one was created", log_path)
