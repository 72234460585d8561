"""Error taxonomy for mirror operations.

Per-entry errors (``ReadError``, ``CopyError``, ``DeleteError``) are caught
by the reconciler and turned into failure records.  ``ListError`` aborts the
subtree whose directory could not be enumerated.  ``BootstrapError`` is
fatal for the whole process.
"""

from __future__ import annotations

from pathlib import Path


class MirrorError(Exception):
    """Base class for all mirror errors.

    Attributes:
        path: The filesystem path the failed operation was applied to.
    """

    action = "process"

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to {self.action} {self.path}: {reason}")


class ReadError(MirrorError):
    """A file could not be read for fingerprinting."""

    action = "read"


class ListError(MirrorError):
    """A directory could not be enumerated."""

    action = "list"


class CopyError(MirrorError):
    """An entry could not be copied into the replica."""

    action = "copy"


class DeleteError(MirrorError):
    """An entry could not be removed from the replica."""

    action = "delete"


class BootstrapError(MirrorError):
    """A required directory or log file could not be created."""

    action = "prepare"
