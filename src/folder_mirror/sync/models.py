"""Pydantic models for the mirror engine.

Defines the core data contracts used across all sync modules:

- ``ChangeKind``: Enum of mutations applied to the replica.
- ``ChangeRecord``: One applied (or failed) mutation.
- ``PartitionResult``: Three-way split of one directory level.
- ``SyncReport``: Aggregate results for a full pass.

All models are frozen (immutable) for safety.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ChangeKind(str, Enum):
    """Possible outcomes recorded for a replica entry."""

    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"
    FAILED = "failed"


class ChangeRecord(BaseModel):
    """A single mutation applied to the replica.

    Attributes:
        kind: What happened to the entry.
        path: POSIX path relative to the replica root.
        is_dir: Whether the entry is a directory.
        detail: Extra context (error message, replacement note).
        dry_run: True when the mutation was only planned.
    """

    kind: ChangeKind
    path: str
    is_dir: bool = False
    detail: str | None = None
    dry_run: bool = False

    model_config = {"frozen": True}

    @property
    def line(self) -> str:
        """Render the record as one human-readable log line."""
        noun = "Directory" if self.is_dir else "File"
        if self.kind == ChangeKind.ADDED:
            text = f'{noun} "{self.path}" added to the replica folder'
        elif self.kind == ChangeKind.UPDATED:
            text = f'{noun} "{self.path}" updated in the replica folder'
        elif self.kind == ChangeKind.REMOVED:
            text = f'{noun} "{self.path}" removed from the replica folder'
        else:
            text = f'Failed to synchronize "{self.path}"'
        if self.detail and self.kind == ChangeKind.FAILED:
            text += f": {self.detail}"
        elif self.detail:
            text += f" ({self.detail})"
        if self.dry_run:
            text += " (dry run)"
        return text


class PartitionResult(BaseModel):
    """Name-level split of a source and a replica directory.

    All three tuples are sorted and pairwise disjoint.

    Attributes:
        only_in_source: Names to be added to the replica.
        only_in_replica: Names to be removed from the replica.
        in_both: Names present on both sides.
    """

    only_in_source: tuple[str, ...] = ()
    only_in_replica: tuple[str, ...] = ()
    in_both: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @classmethod
    def from_snapshots(
        cls, source: tuple[str, ...], replica: tuple[str, ...]
    ) -> PartitionResult:
        """Build a partition from two directory snapshots."""
        source_set = set(source)
        replica_set = set(replica)
        return cls(
            only_in_source=tuple(sorted(source_set - replica_set)),
            only_in_replica=tuple(sorted(replica_set - source_set)),
            in_both=tuple(sorted(source_set & replica_set)),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.only_in_source or self.only_in_replica or self.in_both)


class SyncReport(BaseModel):
    """Aggregate report for one pass.

    Attributes:
        started_at: Human-readable timestamp when the pass started.
        completed_at: Human-readable timestamp when the pass completed.
        dry_run: Whether mutations were skipped.
        records: Change records in the order they were produced.
    """

    started_at: str
    completed_at: str | None = None
    dry_run: bool = False
    records: list[ChangeRecord] = []

    model_config = {"frozen": True}

    def _of_kind(self, kind: ChangeKind) -> list[ChangeRecord]:
        return [r for r in self.records if r.kind == kind]

    @property
    def added(self) -> list[ChangeRecord]:
        """Records where kind is ADDED."""
        return self._of_kind(ChangeKind.ADDED)

    @property
    def updated(self) -> list[ChangeRecord]:
        """Records where kind is UPDATED."""
        return self._of_kind(ChangeKind.UPDATED)

    @property
    def removed(self) -> list[ChangeRecord]:
        """Records where kind is REMOVED."""
        return self._of_kind(ChangeKind.REMOVED)

    @property
    def failed(self) -> list[ChangeRecord]:
        """Records where kind is FAILED."""
        return self._of_kind(ChangeKind.FAILED)

    def summary(self) -> str:
        """Format a one-line summary of the pass."""
        text = (
            f"Pass complete: {len(self.added)} added, "
            f"{len(self.updated)} updated, {len(self.removed)} removed, "
            f"{len(self.failed)} failed"
        )
        if self.dry_run:
            text += " (dry run)"
        return text
