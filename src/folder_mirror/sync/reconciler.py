"""Recursive one-way reconciliation of a replica tree against a source.

For each directory level the reconciler:

1. Partitions the children of both sides by name.
2. Handles names present on both sides: replaces entries whose type
   differs, recurses into directory pairs, and replaces files whose
   fingerprints differ.
3. Removes names present only in the replica.
4. Copies names present only in the source.

The three groups are processed in that order, each in sorted name order,
so the change records of a pass are reproducible.

Error handling is per entry: a failed read, copy, or delete is recorded and
the remaining siblings are still processed.  A directory that cannot be
listed aborts only its own subtree.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from folder_mirror.errors import ListError, MirrorError
from folder_mirror.sync.comparator import partition
from folder_mirror.sync.fingerprint import (
    DEFAULT_ALGORITHM,
    DEFAULT_CHUNK_SIZE,
    files_match,
)
from folder_mirror.sync.models import ChangeKind, ChangeRecord
from folder_mirror.sync.operations import copy_entry, delete_entry
from folder_mirror.sync.reporter import ChangeReporter

logger = logging.getLogger(__name__)


class Reconciler:
    """Bring a replica directory in line with a source directory.

    Args:
        algorithm: Digest used to compare files present on both sides.
        chunk_size: Read size for fingerprinting.
        dry_run: If ``True``, record planned changes without applying them.
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        dry_run: bool = False,
    ) -> None:
        self.algorithm = algorithm
        self.chunk_size = chunk_size
        self.dry_run = dry_run

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def reconcile(
        self,
        source_dir: Path,
        replica_dir: Path,
        reporter: ChangeReporter,
    ) -> None:
        """Reconcile *replica_dir* against *source_dir* recursively.

        Never raises for filesystem failures; they end up in *reporter*.
        """
        self._reconcile_dir(
            source_dir, replica_dir, PurePosixPath(), reporter
        )

    # ------------------------------------------------------------------
    # Per-level processing
    # ------------------------------------------------------------------

    def _reconcile_dir(
        self,
        source_dir: Path,
        replica_dir: Path,
        rel: PurePosixPath,
        reporter: ChangeReporter,
    ) -> None:
        try:
            parts = partition(source_dir, replica_dir)
        except ListError as exc:
            logger.error("Skipping subtree %s: %s", rel, exc)
            reporter.record(self._failure(rel, True, exc))
            return

        for name in parts.in_both:
            self._guard(
                self._sync_common,
                source_dir / name,
                replica_dir / name,
                rel / name,
                reporter,
            )

        for name in parts.only_in_replica:
            self._guard(
                self._remove,
                source_dir / name,
                replica_dir / name,
                rel / name,
                reporter,
            )

        for name in parts.only_in_source:
            self._guard(
                self._add,
                source_dir / name,
                replica_dir / name,
                rel / name,
                reporter,
            )

    def _guard(
        self,
        handler,
        source: Path,
        replica: Path,
        rel: PurePosixPath,
        reporter: ChangeReporter,
    ) -> None:
        """Run *handler* for one entry, recording any ``MirrorError``."""
        try:
            handler(source, replica, rel, reporter)
        except MirrorError as exc:
            logger.error("Error synchronizing %s: %s", rel, exc)
            is_dir = source.is_dir() or replica.is_dir()
            reporter.record(self._failure(rel, is_dir, exc))

    # ------------------------------------------------------------------
    # Entry handlers
    # ------------------------------------------------------------------

    def _sync_common(
        self,
        source: Path,
        replica: Path,
        rel: PurePosixPath,
        reporter: ChangeReporter,
    ) -> None:
        source_is_dir = source.is_dir()
        replica_is_dir = _is_real_dir(replica)
        linked_dir = replica.is_dir() and not replica_is_dir

        if source_is_dir != replica_is_dir or linked_dir:
            if linked_dir:
                old = "directory symlink"
            else:
                old = "directory" if replica_is_dir else "file"
            new = "directory" if source_is_dir else "file"
            if not self.dry_run:
                delete_entry(replica)
                copy_entry(source, replica)
            reporter.record(
                ChangeRecord(
                    kind=ChangeKind.UPDATED,
                    path=str(rel),
                    is_dir=source_is_dir,
                    detail=f"{old} replaced by {new}",
                    dry_run=self.dry_run,
                )
            )
            return

        if source_is_dir:
            self._reconcile_dir(source, replica, rel, reporter)
            return

        if files_match(source, replica, self.algorithm, self.chunk_size):
            return

        if not self.dry_run:
            delete_entry(replica)
            copy_entry(source, replica)
        reporter.record(
            ChangeRecord(
                kind=ChangeKind.UPDATED,
                path=str(rel),
                dry_run=self.dry_run,
            )
        )

    def _remove(
        self,
        source: Path,
        replica: Path,
        rel: PurePosixPath,
        reporter: ChangeReporter,
    ) -> None:
        is_dir = _is_real_dir(replica)
        if not self.dry_run:
            delete_entry(replica)
        reporter.record(
            ChangeRecord(
                kind=ChangeKind.REMOVED,
                path=str(rel),
                is_dir=is_dir,
                dry_run=self.dry_run,
            )
        )

    def _add(
        self,
        source: Path,
        replica: Path,
        rel: PurePosixPath,
        reporter: ChangeReporter,
    ) -> None:
        is_dir = source.is_dir()
        if not self.dry_run:
            copy_entry(source, replica)
        reporter.record(
            ChangeRecord(
                kind=ChangeKind.ADDED,
                path=str(rel),
                is_dir=is_dir,
                dry_run=self.dry_run,
            )
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _failure(
        rel: PurePosixPath, is_dir: bool, exc: MirrorError
    ) -> ChangeRecord:
        return ChangeRecord(
            kind=ChangeKind.FAILED,
            path=str(rel),
            is_dir=is_dir,
            detail=str(exc),
        )


def _is_real_dir(path: Path) -> bool:
    # A symlinked directory in the replica is replaced, never walked into
    return path.is_dir() and not path.is_symlink()
