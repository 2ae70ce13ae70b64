"""Loguru setup shared by the web app and the test suite.

Every record carries ``extra["correlation_id"]``: the id of the request
being served, or ``"-"`` outside of a request.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "techquiry.log"

_correlation_id: ContextVar[str] = ContextVar("techquiry_correlation_id", default="-")


def _inject_correlation_id(record) -> None:
    record["extra"].setdefault("correlation_id", _correlation_id.get())


logger = _logger.patch(_inject_correlation_id)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("-")


class _StdlibBridge(logging.Handler):
    """Forwards stdlib records (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str | None = None) -> None:
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    log_file = Path(os.getenv("LOG_FILE") or _DEFAULT_LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    sink_options = dict(
        level=level,
        format=_FORMAT,
        filter=sanitize_record,
        backtrace=False,
        diagnose=False,
    )
    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **sink_options)
    _logger.add(str(log_file), colorize=False, enqueue=True, encoding="utf-8", **sink_options)

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
