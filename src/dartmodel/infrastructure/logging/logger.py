# src/dartmodel/infrastructure/logging/logger.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Structured JSON logging utilities.

This module exposes an idempotent root configurator and a per-module logger
factory that produce JSON logs suitable for ingestion by log pipelines.

Features:
    * Stable keys: ``ts``, ``level``, ``logger``, ``message``.
    * Automatic enrichment with ``job_id`` via contextvars, so every log line
      emitted while a transform or model build runs can be correlated.
    * Fallback enrichment via record attributes or the ``JOB_ID``
      environment variable.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "set_job_context",
    "clear_job_context",
    "get_job_id",
]

_JOB_ID_ENV_KEY = "JOB_ID"

# Per-job correlation context (task-local via contextvars).
_JOB_ID_CTX: ContextVar[str | None] = ContextVar("dartmodel_job_id", default=None)


def set_job_context(*, job_id: str | None = None) -> None:
    """Set the job correlation identifier on the current context.

    Args:
        job_id: Identifier of the running job (e.g. ``transform:00126380:2024``).
    """
    if job_id is not None:
        _JOB_ID_CTX.set(job_id)


def clear_job_context() -> None:
    """Clear the job correlation identifier of the current context."""
    _JOB_ID_CTX.set(None)


def get_job_id() -> str | None:
    """Return the current job id from contextvars, if any."""
    return _JOB_ID_CTX.get(None)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class _JsonFormatter(logging.Formatter):
    """JSON log formatter emitting stable keys and optional extras."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object.

        Args:
            record: Logging record.

        Returns:
            JSON-encoded log line.
        """
        ts = datetime.now(tz=UTC).isoformat()
        payload: dict[str, Any] = {
            "ts": ts,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Job id enrichment: prefer record attribute, then contextvar, then env.
        job_id: str | None = (
            getattr(record, "job_id", None) or _JOB_ID_CTX.get(None) or os.getenv(_JOB_ID_ENV_KEY)
        )
        if job_id:
            payload["job_id"] = job_id

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)

        # Extra dict, if any (``logger.info(..., extra={"extra": {...}})``).
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=_json_default)


def configure_root_logging(level: str | int | None = None) -> None:
    """Initialize the root logger with a JSON stream handler (idempotent).

    Args:
        level: Logging level or level name. If ``None``, use env ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()

    env_level = os.getenv("LOG_LEVEL")
    resolved: int | str = (
        level if level is not None else (env_level.upper() if env_level else "INFO")
    )
    root.setLevel(resolved.upper() if isinstance(resolved, str) else resolved)

    if root.handlers:
        # Already configured; prevent duplicate handlers.
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return a module-specific logger backed by the JSON root handler.

    This does *not* implicitly configure the root logger. Call
    :func:`configure_root_logging` once at startup for global defaults.

    Args:
        name: Logger name, typically ``__name__`` of the caller.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
