"""Change reporting for mirror passes.

Provides the per-pass accumulator and the text format of the audit log:

- ``ChangeReporter`` -- collects change lines during one pass and flushes
  them as a timestamped block to the console and the append-only log file.
- ``format_pass_block`` -- pure formatter for one block.
- ``timestamp`` -- locale-default calendar string used in block headers.
- ``printable`` -- escapes undecodable file name bytes for output.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, TextIO

from .models import ChangeRecord

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 31


def timestamp() -> str:
    """Return the current local time as a locale-default calendar string."""
    return datetime.now().strftime("%c")


def printable(text: str) -> str:
    """Return *text* with undecodable file name bytes shown as ``\\xNN``.

    Names that are not valid in the file system encoding come back from
    ``os.listdir`` with surrogate escapes, which cannot be written to a
    UTF-8 stream.
    """
    try:
        raw = os.fsencode(text)
    except UnicodeEncodeError:
        return text.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode(sys.getfilesystemencoding(), "backslashreplace")


def format_pass_block(
    started_at: str, completed_at: str, lines: list[str]
) -> str:
    """Format one pass as a log block.

    Args:
        started_at: Timestamp for the header line.
        completed_at: Timestamp for the trailer line.
        lines: Change lines, in order.

    Returns:
        Block text ending with a newline.
    """
    out = [f"[{started_at}] Synchronization iteration has started"]
    out.extend(lines)
    out.append(f"[{completed_at}] Synchronization iteration has ended")
    out.append(SEPARATOR)
    return "\n".join(out) + "\n"


class ChangeReporter:
    """Accumulate change lines for a single pass.

    One reporter is owned by the active pass and threaded through the
    recursive reconciliation.  ``flush()`` empties it.

    Args:
        stream: Console stream for live output (default: ``sys.stdout``
            looked up at flush time).
        clock: Callable returning the end-of-pass timestamp.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        clock: Callable[[], str] = timestamp,
    ) -> None:
        self._stream = stream
        self._clock = clock
        self._lines: list[str] = []
        self._records: list[ChangeRecord] = []
        # Failure notes that have not reached the log file yet
        self._pending: list[str] = []

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def records(self) -> list[ChangeRecord]:
        return list(self._records)

    def record(self, entry: ChangeRecord | str) -> None:
        """Append one change to the in-progress buffer."""
        if isinstance(entry, ChangeRecord):
            self._records.append(entry)
            line = entry.line
        else:
            line = entry
        line = printable(line)
        logger.debug("Change: %s", line)
        self._lines.append(line)

    def flush(self, started_at: str, log_path: Path) -> str | None:
        """Write the buffered block to the console and the log file.

        No-op when nothing was recorded.  A log file that cannot be opened
        does not raise: the block still reaches the console and a failure
        note is carried into the next non-empty block.

        Args:
            started_at: Timestamp taken when the pass started.
            log_path: Append-only audit log.

        Returns:
            The block text, or ``None`` if the buffer was empty.
        """
        if not self._lines:
            return None

        block = format_pass_block(
            started_at, self._clock(), self._pending + self._lines
        )
        stream = self._stream or sys.stdout
        _write_console(stream, block)

        try:
            with open(
                log_path, "a", encoding="utf-8", errors="backslashreplace"
            ) as fh:
                fh.write(block)
        except OSError as exc:
            note = printable(
                f"Failed to write log file {log_path}: "
                f"{exc.strerror or exc}"
            )
            logger.error(note)
            _write_console(stream, note + "\n")
            self._pending = [note]
        else:
            self._pending = []

        self._lines.clear()
        self._records.clear()
        return block


def _write_console(stream: TextIO, text: str) -> None:
    try:
        stream.write(text)
    except UnicodeEncodeError:
        encoding = getattr(stream, "encoding", None) or "ascii"
        stream.write(text.encode(encoding, "backslashreplace").decode(encoding))
    stream.flush()
