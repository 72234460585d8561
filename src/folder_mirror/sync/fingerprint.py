"""Content fingerprinting for replica change detection.

Files are hashed in fixed-size chunks so large files never have to be held
in memory.  SHA-256 is the default digest; any ``hashlib`` algorithm
(``md5`` included) can be selected through configuration.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from folder_mirror.errors import ReadError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha256"
DEFAULT_CHUNK_SIZE = 65536


def is_supported_algorithm(name: str) -> bool:
    """Return ``True`` if *name* is a fixed-length ``hashlib`` digest."""
    name = name.lower()
    # shake_* digests need an explicit output length
    return name in hashlib.algorithms_available and not name.startswith(
        "shake"
    )


def file_digest(
    path: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Compute the hex digest of a file's full byte content.

    Args:
        path: File to hash.
        algorithm: ``hashlib`` algorithm name.
        chunk_size: Number of bytes read per iteration.

    Returns:
        Hex digest string.

    Raises:
        ReadError: If the file cannot be opened or read.
    """
    h = hashlib.new(algorithm)
    try:
        with open(path, "rb") as fh:
            while chunk := fh.read(chunk_size):
                h.update(chunk)
    except OSError as exc:
        raise ReadError(path, exc.strerror or str(exc)) from exc
    return h.hexdigest()


def files_match(
    source: Path,
    replica: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bool:
    """Return ``True`` if both files have the same fingerprint.

    Raises:
        ReadError: If either file cannot be read.
    """
    source_digest = file_digest(source, algorithm, chunk_size)
    replica_digest = file_digest(replica, algorithm, chunk_size)
    logger.debug(
        "Fingerprints for %s: source=%s replica=%s",
        replica,
        source_digest,
        replica_digest,
    )
    return source_digest == replica_digest
