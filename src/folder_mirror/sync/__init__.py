"""One-way directory mirror engine.

Public API for keeping a replica directory identical to a source
directory.

Architecture
------------
Each pass walks both trees one level at a time.  Children are compared by
name, files present on both sides are compared by content fingerprint,
and the replica is mutated by whole-entry copies and deletions only.

Modules:

- ``engine``      -- ``MirrorEngine``: runs one full pass.
- ``reconciler``  -- ``Reconciler``: recursive update/remove/add logic.
- ``comparator``  -- ``partition``: name-level split of two directories.
- ``fingerprint`` -- chunked file digests.
- ``operations``  -- copy and delete primitives with typed errors.
- ``reporter``    -- ``ChangeReporter`` and the audit log block format.
- ``models``      -- ``ChangeKind``, ``ChangeRecord``, ``PartitionResult``,
  ``SyncReport``: core data contracts.

Usage example
-------------
::

    from folder_mirror.config import load_config
    from folder_mirror.sync import MirrorEngine

    config = load_config("source", "replica", "logs/sync.log", 10)
    report = MirrorEngine(config).run_pass()
    print(report.summary())
"""

from .comparator import partition
from .engine import MirrorEngine
from .fingerprint import file_digest, files_match
from .models import (
    ChangeKind,
    ChangeRecord,
    PartitionResult,
    SyncReport,
)
from .reconciler import Reconciler
from .reporter import ChangeReporter, format_pass_block

__all__ = [
    "ChangeKind",
    "ChangeRecord",
    "ChangeReporter",
    "MirrorEngine",
    "PartitionResult",
    "Reconciler",
    "SyncReport",
    "file_digest",
    "files_match",
    "format_pass_block",
    "partition",
]
