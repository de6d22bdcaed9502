"""Logging setup with context injection.

Features:
- console handler
- JSON logs optional (easy ingestion)
- context injection (execution_id/item_index/stage) through a LoggerAdapter
"""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any

CONTEXT_FIELDS = ("execution_id", "item_index", "stage")

# ---------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k in CONTEXT_FIELDS:
            if hasattr(record, k):
                base[k] = getattr(record, k)

        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(base, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Format log records as human-readable text."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [record.levelname, record.name]

        ctx = [f"{k}={getattr(record, k)}" for k in CONTEXT_FIELDS if hasattr(record, k)]
        if ctx:
            parts.append("[" + " ".join(ctx) + "]")

        parts.append(record.getMessage())
        s = " ".join(parts)

        if record.exc_info:
            s += "\n" + self.formatException(record.exc_info)
        return s


# ---------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------


def setup_logging(level: str = "INFO", json_logs: bool = False) -> logging.Logger:
    """Configure the package logger with a single console handler.

    Pipeline and adapter loggers (``pipeline.*``, ``adapter.*``) get the same
    handler so their output is formatted consistently.
    """
    fmt = JsonFormatter() if json_logs else TextFormatter()
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root = None
    for name in ("beyond_presence", "pipeline", "adapter"):
        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        logger.propagate = False

        # Clear old handlers if re-configuring
        for h in list(logger.handlers):
            logger.removeHandler(h)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(numeric_level)
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        root = root or logger

    return root


# ---------------------------------------------------------------------
# Context injection
# ---------------------------------------------------------------------


class ContextAdapter(logging.LoggerAdapter):
    """Inject context fields into log records."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        merged = dict(self.extra)
        merged.update(extra)
        kwargs["extra"] = merged
        return msg, kwargs


def with_context(
    logger: logging.Logger,
    *,
    execution_id: str | None = None,
    item_index: int | None = None,
    stage: str | None = None,
) -> ContextAdapter:
    """Create a context adapter with execution, item and stage info."""
    extra: dict[str, Any] = {}
    if execution_id:
        extra["execution_id"] = execution_id
    if item_index is not None:
        extra["item_index"] = item_index
    if stage:
        extra["stage"] = stage
    return ContextAdapter(logger, extra)
