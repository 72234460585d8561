"""Filesystem mutations applied to the replica.

Only file content is copied; permissions and timestamps are left to the
platform defaults.  Every ``OSError`` is wrapped in the matching
``MirrorError`` subclass so the reconciler can record it per entry.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from folder_mirror.errors import CopyError, DeleteError


def copy_entry(source: Path, target: Path) -> None:
    """Copy a file, or a directory recursively, from *source* to *target*.

    *target* must not exist.

    Raises:
        CopyError: If any part of the copy fails.
    """
    try:
        if source.is_dir():
            shutil.copytree(source, target, copy_function=shutil.copyfile)
        else:
            shutil.copyfile(source, target)
    except OSError as exc:
        raise CopyError(source, str(exc)) from exc


def delete_entry(target: Path) -> None:
    """Remove a file, or a directory recursively.

    Raises:
        DeleteError: If the entry cannot be removed.
    """
    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
    except OSError as exc:
        raise DeleteError(target, exc.strerror or str(exc)) from exc
