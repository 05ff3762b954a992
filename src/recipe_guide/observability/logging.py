"""Logging configuration using Loguru.

Production output is one JSON document per line; development output is
colorized text. Records are enriched with the request-scoped context bound
through :func:`bind_context`, and standard library logging is routed into
Loguru so uvicorn and friends end up in the same sink.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncio",
)


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through Loguru at the matching level."""
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so Loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _format_record(record: dict[str, Any]) -> str:
    """Serialize a record, plus the bound context, to a JSON line."""
    record["extra"].update(_log_context.get())

    payload = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        **record["extra"],
    }

    exception = record["exception"]
    if exception:
        payload["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
            "traceback": exception.traceback is not None,
        }

    # Braces are escaped because Loguru treats the return value as a template
    line = orjson.dumps(payload, default=str).decode()
    return line.replace("{", "{{").replace("}", "}}") + "\n"


def _format_record_dev(record: dict[str, Any]) -> str:
    """Build a colorized, human-readable format string for a record."""
    context = _log_context.get()
    extra = {k: v for k, v in record["extra"].items() if k != "name"}
    fields = {**context, **extra}

    suffix = ""
    if fields:
        rendered = " ".join(f"{k}={v}" for k, v in fields.items())
        suffix = " | " + rendered.replace("{", "{{").replace("}", "}}")

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
        f"{suffix}\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: ``"json"`` or ``"text"``.
        is_development: Force colorized text output.
        log_file: Optional path for a rotated JSON log file.
    """
    logger.remove()
    level = log_level.upper()

    if log_format == "json" and not is_development:
        logger.add(
            sys.stdout,
            format=_format_record,
            level=level,
            colorize=False,
            backtrace=True,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_format_record_dev,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=_format_record,
            level=level,
            rotation="50 MB",
            retention="7 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return the Loguru logger bound to ``name`` (usually ``__name__``)."""
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Add key/value pairs to the logging context of the current task."""
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def clear_context() -> None:
    """Drop the whole logging context, typically at request start."""
    _log_context.set({})


__all__ = [
    "InterceptHandler",
    "bind_context",
    "clear_context",
    "get_logger",
    "logger",
    "setup_logging",
]
