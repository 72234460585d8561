"""Command-line entry point for folder-mirror.

    folder-mirror SOURCE REPLICA LOG_FILE INTERVAL [options]

Runs a mirror pass every INTERVAL seconds until interrupted.  Change blocks
are written to stdout and appended to LOG_FILE; diagnostics go to stderr.
"""

import argparse
import logging
import sys
from typing import Any, NoReturn

import yaml
from dotenv import load_dotenv

from . import __version__
from .bootstrap import ensure_directories
from .config import load_config
from .config_loader import discover_config_files, load_hierarchical_config
from .config_schema import UnifiedConfig, build_config
from .errors import BootstrapError
from .logger import setup_logging
from .scheduler import Scheduler
from .sync.engine import MirrorEngine
from .validators import validate_interval, validate_relative_path

logger = logging.getLogger(__name__)

ARGUMENTS_DESCRIPTION = """\
Arguments:
  SOURCE    source directory relative path
  REPLICA   replica directory relative path
  LOG_FILE  log file relative path
  INTERVAL  synchronization interval in whole seconds (> 0)
"""


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on invalid arguments."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        sys.stderr.write(ARGUMENTS_DESCRIPTION)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> UsageParser:
    parser = UsageParser(
        prog="folder-mirror",
        description="Mirror a source directory onto a replica directory on a fixed interval",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Mirror every 30 seconds
  folder-mirror source replica logs/sync.log 30

  # Single pass, showing what would change
  folder-mirror source replica logs/sync.log 30 --once --dry-run

  # Use MD5 fingerprints
  folder-mirror source replica logs/sync.log 30 --digest md5

Optional settings are also read from FOLDER_MIRROR_* environment variables,
a .env file, and .folder_mirror/config.yml.
        """,
    )
    parser.add_argument("source", help="Source directory (relative path)")
    parser.add_argument("replica", help="Replica directory (relative path)")
    parser.add_argument("log_file", help="Audit log file (relative path)")
    parser.add_argument(
        "interval", help="Synchronization interval in whole seconds"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single pass and exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Record planned changes without modifying the replica",
    )
    parser.add_argument(
        "--digest",
        help="hashlib algorithm for file fingerprints (default: sha256)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"folder-mirror version {__version__}",
    )
    return parser


def _stderr_print(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def _load_file_config() -> UnifiedConfig:
    """Load the YAML config, or defaults when no config file exists."""
    if not discover_config_files():
        return UnifiedConfig()
    return build_config(load_hierarchical_config())


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, then run passes until stopped.

    Returns:
        Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    for field_name, value in (
        ("Source path", args.source),
        ("Replica path", args.replica),
        ("Log path", args.log_file),
    ):
        ok, reason = validate_relative_path(field_name, value)
        if not ok:
            parser.error(reason)
    ok, reason = validate_interval(args.interval)
    if not ok:
        parser.error(reason)

    # .env first so ${VAR} interpolation in YAML can use its values
    load_dotenv()

    try:
        unified = _load_file_config()
        config = load_config(
            source=args.source,
            replica=args.replica,
            log_file=args.log_file,
            interval=int(args.interval),
            digest=args.digest,
            dry_run=args.dry_run,
            debug=args.debug,
            yaml_fallbacks=unified.mirror.model_dump(),
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        _stderr_print(f"ERROR: Configuration error: {e}")
        return 1

    setup_logging(
        debug=config.debug,
        log_file=unified.logging.file,
        debug_format=unified.logging.format,
        level=unified.logging.level,
    )
    logger.info(
        "Mirroring %s -> %s every %ds (digest=%s, log=%s)",
        config.source,
        config.replica,
        config.interval,
        config.digest,
        config.log_file,
    )
    if config.dry_run:
        logger.warning("Dry run enabled: the replica will not be modified")

    engine = MirrorEngine(config)
    scheduler = Scheduler(
        config.interval, max_passes=1 if args.once else None
    )

    try:
        ensure_directories(
            config.source_path, config.replica_path, config.log_path
        )
        scheduler.run(engine.run_pass)
    except BootstrapError as e:
        logger.error("Bootstrap failed: %s", e)
        _stderr_print(f"ERROR: {e}")
        return 1
    except KeyboardInterrupt:
        _stderr_print("\nInterrupted.")
        return 0

    return 0


def run(argv: Any = None) -> None:
    """Console script entry point."""
    sys.exit(main(argv))


if __name__ == "__main__":
    run()
