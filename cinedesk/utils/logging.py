"""Logging setup for CineDesk."""

import logging
import sys
from typing import Literal

from cinedesk.config import get_settings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Libraries that log every request or statement at INFO/DEBUG
_QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn.access",
    "sqlalchemy.engine",
    "python_multipart",
    "aiosqlite",
)


def setup_logging(level: LogLevel | None = None) -> None:
    """Send application logs to stdout; DEBUG outside production unless `level` says otherwise."""
    settings = get_settings()
    if level is None:
        level = "INFO" if settings.is_production else "DEBUG"

    logging.basicConfig(
        level=getattr(logging, level),
        format=f"%(asctime)s - {settings.app_name} - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Logger wrapper that prefixes every line with `[key=value]` pairs.

    A film submission logs through one of these, so all lines of a run
    (uploads, insert, audit) share the same `[film=...] [year=...]` prefix.
    `bind()` adds keys learned along the way, such as the new film id.
    """

    def __init__(self, logger: logging.Logger, **context: object) -> None:
        self.logger = logger
        self.context = context
        self.prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def bind(self, **extra: object) -> "LogContext":
        return LogContext(self.logger, **{**self.context, **extra})

    def _log(self, level: int, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 3)
        self.logger.log(level, f"{self.prefix} {msg}" if self.prefix else msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, **kwargs)
