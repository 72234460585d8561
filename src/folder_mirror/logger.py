import json
import logging
import os
import sys

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON line.

    Keys: ``ts``, ``level``, ``logger``, ``msg`` and, for records logged
    with exception info, ``exc``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = dict(
            ts=self.formatTime(record, self.datefmt),
            level=record.levelname,
            logger=record.name,
            msg=record.getMessage(),
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _resolve_level(debug: bool, level: str | None) -> int:
    if debug:
        return logging.DEBUG
    name = os.getenv("LOG_LEVEL") or level or "INFO"
    return getattr(logging, name.upper(), logging.INFO)


def _with_format(
    handler: logging.Handler, debug_format: str, fmt: str
) -> logging.Handler:
    if debug_format == "json":
        handler.setFormatter(JsonFormatter(datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    debug: bool = False,
    log_file: str | None = None,
    debug_format: str = "text",
    level: str | None = None,
) -> None:
    """
    Configure diagnostic logging for the mirror process.

    Diagnostics always go to stderr so they never mix with the change
    blocks written to stdout.  They are separate from the audit log kept
    by the change reporter.

    Args:
        debug: Force DEBUG regardless of any configured level.
        log_file: Optional diagnostic log file, written in addition to stderr.
        debug_format: "text" (default) or "json" (one JSON object per line).
        level: Level name from the config file, used when LOG_LEVEL is unset.

    Environment variables:
        LOG_LEVEL: Level name; unknown names fall back to INFO.
    """
    handlers = [
        _with_format(
            logging.StreamHandler(sys.stderr), debug_format, CONSOLE_FORMAT
        )
    ]
    if log_file:
        handlers.append(
            _with_format(
                logging.FileHandler(log_file, mode="a"),
                debug_format,
                FILE_FORMAT,
            )
        )

    logging.basicConfig(level=_resolve_level(debug, level), handlers=handlers)
