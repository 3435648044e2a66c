"""Loguru sinks tagged with the active session id.

Records carry ``extra[correlation_id]``, which the session lifecycle sets to the
current session id while one is active and resets to ``-`` afterwards.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_NO_SESSION = "-"
_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")

_LINE = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_session_tag: ContextVar[str] = ContextVar("syntrio_session_tag", default=_NO_SESSION)

_logger.configure(extra={"correlation_id": _NO_SESSION})


def _resolve_log_file() -> Path:
    explicit = os.getenv("LOG_FILE")
    if explicit:
        return Path(explicit)
    return Path.cwd() / "instance" / "syntrio.log"


def _resolve_level(level: str | None, debug: bool) -> str:
    chosen = level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug else "INFO")
    return chosen.upper()


class _StdlibBridge(logging.Handler):
    """Forwards stdlib records (httpx, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.bind(correlation_id=_session_tag.get()).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Loguru proxy bound to the session id of the calling context."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_session_tag.get()), name)


def set_correlation_id(value: str | None) -> None:
    _session_tag.set(value or _NO_SESSION)


def get_correlation_id() -> str:
    return _session_tag.get()


def clear_correlation_id() -> None:
    _session_tag.set(_NO_SESSION)


def setup_logging(level: str | None = None, *, debug: bool = False) -> None:
    """Install a colored stderr sink and a plain file sink, both sanitized."""
    resolved = _resolve_level(level, debug)
    log_file = _resolve_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    shared = {
        "level": resolved,
        "format": _LINE,
        "backtrace": False,
        "diagnose": False,
        "filter": sanitize_record,
    }
    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **shared)
    _logger.add(str(log_file), colorize=False, enqueue=True, encoding="utf-8", **shared)

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
