"""Directory comparison at a single tree level.

Children are compared by name only; whether an entry is a file or a
directory is decided by the reconciler.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from folder_mirror.errors import ListError
from folder_mirror.sync.models import PartitionResult

logger = logging.getLogger(__name__)


def list_children(path: Path) -> tuple[str, ...]:
    """Return the sorted names of the immediate children of *path*.

    Raises:
        ListError: If *path* is missing, not a directory, or unreadable.
    """
    try:
        names = os.listdir(path)
    except OSError as exc:
        raise ListError(path, exc.strerror or str(exc)) from exc
    return tuple(sorted(names))


def partition(source_dir: Path, replica_dir: Path) -> PartitionResult:
    """Split the children of two directories into a ``PartitionResult``.

    Raises:
        ListError: If either directory cannot be listed.
    """
    source_names = list_children(source_dir)
    replica_names = list_children(replica_dir)
    logger.debug(
        "Listing %s: %d entries, %s: %d entries",
        source_dir,
        len(source_names),
        replica_dir,
        len(replica_names),
    )
    return PartitionResult.from_snapshots(source_names, replica_names)
