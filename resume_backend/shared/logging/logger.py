"""Structured logging for the auth service.

Every record carries the request correlation id and passes through the
sensitive-data filter before reaching a sink.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>req={extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_QUIET_LIBRARIES = {
    "werkzeug": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")

_logger.configure(extra={"correlation_id": "-"})


def _log_file_path() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parents[3] / "instance" / "auth.log"


class _InterceptHandler(logging.Handler):
    """Route stdlib logging (werkzeug, SQLAlchemy, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).bind(
            correlation_id=_CORRELATION_ID.get()
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that injects correlation ids via ContextVar."""

    def __getattr__(self, name):
        bound = _logger.bind(correlation_id=_CORRELATION_ID.get())
        return getattr(bound, name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")


def _sink_options(level: str) -> dict[str, Any]:
    return {
        "level": level,
        "format": _FMT,
        "backtrace": False,
        "diagnose": False,
        "filter": sanitize_record,
    }


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = _log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **_sink_options(level))
    _logger.add(
        str(log_file),
        colorize=False,
        enqueue=True,
        rotation=os.getenv("LOG_ROTATION", "10 MB"),
        retention=os.getenv("LOG_RETENTION", "14 days"),
        encoding="utf-8",
        **_sink_options(level),
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, lib_level in _QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(lib_level)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
