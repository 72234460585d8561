"""Mirror engine that runs one complete pass.

The ``MirrorEngine`` ties together bootstrap, reconciler, and reporter into
a pass.  It:

1. Takes the pass-start timestamp.
2. Ensures the source, replica, and log locations exist.
3. Reconciles the replica against the source recursively.
4. Flushes the collected change lines to the console and the audit log.
5. Builds and returns a ``SyncReport``.

Entry failures never abort a pass.  ``BootstrapError`` does, and is left
for the caller to treat as fatal.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, TextIO

from folder_mirror.bootstrap import ensure_directories
from folder_mirror.sync.models import SyncReport
from folder_mirror.sync.reconciler import Reconciler
from folder_mirror.sync.reporter import ChangeReporter, timestamp

if TYPE_CHECKING:
    from folder_mirror.config import Config

logger = logging.getLogger(__name__)


class MirrorEngine:
    """Run mirror passes for one source/replica pair.

    The reporter is kept across passes so a log write failure from one pass
    is reported in the next block.

    Args:
        config: Validated runtime configuration.
        stream: Console stream for change blocks (default: stdout).
        clock: Timestamp source, overridable in tests.
    """

    def __init__(
        self,
        config: Config,
        stream: TextIO | None = None,
        clock: Callable[[], str] = timestamp,
    ) -> None:
        self.config = config
        self.clock = clock
        self.reconciler = Reconciler(
            algorithm=config.digest,
            chunk_size=config.chunk_size,
            dry_run=config.dry_run,
        )
        self.reporter = ChangeReporter(stream=stream, clock=clock)

    def run_pass(self) -> SyncReport:
        """Execute a full pass.

        Returns:
            A ``SyncReport`` listing every change recorded during the pass.

        Raises:
            BootstrapError: If a required location cannot be created.
        """
        started_at = self.clock()
        logger.debug("[%s] Synchronization pass started", started_at)

        ensure_directories(
            self.config.source_path,
            self.config.replica_path,
            self.config.log_path,
        )

        self.reconciler.reconcile(
            self.config.source_path,
            self.config.replica_path,
            self.reporter,
        )

        records = self.reporter.records
        self.reporter.flush(started_at, self.config.log_path)

        report = SyncReport(
            started_at=started_at,
            completed_at=self.clock(),
            dry_run=self.config.dry_run,
            records=records,
        )
        if records:
            logger.info(report.summary())
        else:
            logger.debug("No changes")
        return report
