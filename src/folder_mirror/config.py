"""Runtime configuration for a mirror process.

The four positional CLI arguments (source, replica, log file, interval) are
always given on the command line.  Tuning options are read from CLI flags,
environment variables, .env files, and YAML config file fallbacks.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    FOLDER_MIRROR_DIGEST: hashlib algorithm for fingerprints (default: sha256)
    FOLDER_MIRROR_CHUNK_SIZE: Read chunk size in bytes (default: 65536)
    FOLDER_MIRROR_DRY_RUN: Plan changes without applying them (default: false)
    FOLDER_MIRROR_DEBUG: Enable debug logging (default: false)
"""

import os
import threading
from dataclasses import dataclass
from pathlib import Path

from .sync.fingerprint import (
    DEFAULT_ALGORITHM,
    DEFAULT_CHUNK_SIZE,
    is_supported_algorithm,
)


@dataclass
class Config:
    source: str
    replica: str
    log_file: str
    interval: int
    digest: str = DEFAULT_ALGORITHM
    chunk_size: int = DEFAULT_CHUNK_SIZE
    dry_run: bool = False
    debug: bool = False

    @property
    def source_path(self) -> Path:
        return Path(self.source)

    @property
    def replica_path(self) -> Path:
        return Path(self.replica)

    @property
    def log_path(self) -> Path:
        return Path(self.log_file)


def validate_config(config: Config) -> None:
    """Validate configuration values and raise ValueError if invalid.

    Args:
        config: Config instance to validate.

    Raises:
        ValueError: If the interval, digest or chunk size is invalid, if
            the replica overlaps the source, or if the log file lies inside
            either directory.
    """
    if config.interval <= 0:
        raise ValueError(
            f"Invalid interval {config.interval}: must be greater than zero"
        )
    if config.interval > threading.TIMEOUT_MAX:
        raise ValueError(
            f"Invalid interval {config.interval}: must be at most "
            f"{int(threading.TIMEOUT_MAX)} seconds"
        )

    config.digest = config.digest.strip().lower()
    if not is_supported_algorithm(config.digest):
        raise ValueError(
            f"Invalid digest '{config.digest}': not a hashlib algorithm"
        )

    if config.chunk_size <= 0:
        raise ValueError(
            f"Invalid chunk size {config.chunk_size}: must be positive"
        )

    source = config.source_path.resolve()
    replica = config.replica_path.resolve()
    if (
        source == replica
        or replica.is_relative_to(source)
        or source.is_relative_to(replica)
    ):
        raise ValueError(
            f"Source '{config.source}' and replica '{config.replica}' "
            "must not contain each other"
        )

    log = config.log_path.resolve()
    for label, root in (("source", source), ("replica", replica)):
        if log.is_relative_to(root):
            raise ValueError(
                f"Log file '{config.log_file}' must not be inside the "
                f"{label} directory '{getattr(config, label)}'"
            )


def load_config(
    source: str,
    replica: str,
    log_file: str,
    interval: int,
    digest: str | None = None,
    dry_run: bool = False,
    debug: bool = False,
    yaml_fallbacks: dict | None = None,
) -> Config:
    """Load configuration with unified precedence.

    Resolution order for each optional field (highest to lowest):
        CLI arg > env var / .env > yaml_fallbacks > built-in default

    The caller is responsible for calling ``load_dotenv()`` before this
    function so that .env values are available via ``os.getenv()``.

    Args:
        source: Source directory (CLI positional).
        replica: Replica directory (CLI positional).
        log_file: Audit log path (CLI positional).
        interval: Seconds between passes (CLI positional).
        digest: Override digest algorithm.
        dry_run: Dry-run CLI flag.
        debug: Debug CLI flag.
        yaml_fallbacks: Dict of values from the YAML ``mirror`` section.

    Returns:
        Validated Config instance.

    Raises:
        ValueError: If any value is invalid.
    """
    fb = yaml_fallbacks or {}

    final_digest = (
        digest
        or os.getenv("FOLDER_MIRROR_DIGEST")
        or fb.get("digest")
        or DEFAULT_ALGORITHM
    )

    def get_bool_env(key: str) -> bool | None:
        """Return True/False from env var, or None if unset."""
        val = os.getenv(key)
        if val is None:
            return None
        return val.lower() in ("true", "1", "yes", "on")

    def resolve_flag(cli_value: bool, env_key: str, fb_key: str) -> bool:
        if cli_value:
            return True
        env_value = get_bool_env(env_key)
        if env_value is not None:
            return env_value
        return bool(fb.get(fb_key, False))

    final_dry_run = resolve_flag(dry_run, "FOLDER_MIRROR_DRY_RUN", "dry_run")
    final_debug = resolve_flag(debug, "FOLDER_MIRROR_DEBUG", "debug")

    chunk_raw = os.getenv("FOLDER_MIRROR_CHUNK_SIZE")
    if chunk_raw is not None:
        try:
            final_chunk = int(chunk_raw)
        except ValueError:
            raise ValueError(
                f"Invalid FOLDER_MIRROR_CHUNK_SIZE '{chunk_raw}': must be a positive number"
            ) from None
    elif "chunk_size" in fb:
        final_chunk = int(fb["chunk_size"])
    else:
        final_chunk = DEFAULT_CHUNK_SIZE

    config = Config(
        source=source,
        replica=replica,
        log_file=log_file,
        interval=interval,
        digest=final_digest,
        chunk_size=final_chunk,
        dry_run=final_dry_run,
        debug=final_debug,
    )

    validate_config(config)

    return config
