"""
Structured logging: timestamp, level, event_type, logger name.

structlog with ISO timestamps and consistent keys. Logs go to stderr so that
stdout carries only the statistics tables. Progress events (API calls, window
bounds, batch ranges) are emitted at debug level and only show up when the
run is started with DEBUG=true.

Uses only Python stdlib logging and structlog; no backend_txstats imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# Human-readable by default (CLI tool); LOG_FORMAT=json for aggregation
LOG_FORMAT = os.getenv("LOG_FORMAT", "console").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type for JSON output; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    """Resolve sys.stderr per call so redirected streams are honoured."""
    return structlog.PrintLogger(file=sys.stderr)


def configure_structlog(
    level: int | str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Configure structlog: timestamp, level, event_type, JSON or console output.

    Safe to call again (e.g. after settings are loaded with DEBUG=true);
    loggers are not cached so the new level applies to existing module loggers.
    """
    if level is None:
        level_value = LOG_LEVEL_VALUE
    elif isinstance(level, str):
        level_value = getattr(logging, level.upper(), logging.INFO)
    else:
        level_value = level
    fmt = (log_format or LOG_FORMAT).strip().lower()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        _add_timestamp,
    ]
    if fmt == "json":
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(_normalize_event)
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


# One-time configuration on first import
if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Return a structured logger for the given module name.

    Log with the event name first and keyword context after:
        logger = get_logger(__name__)
        logger.info("history_fetch_batch", batch_size=100, api_calls=3)
    Binding is lazy, so the level set by configure_structlog() at startup
    applies to module-level loggers created at import time.
    """
    return structlog.get_logger(name, logger_name=name)
