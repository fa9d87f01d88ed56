"""Structured Logging — one JSON line per event, tagged with the task and request it concerns.

Invariants:
    - Every line carries timestamp, level, logger, service and message
    - Request-scoped lines carry method and path (see request_extra)
    - Task lines carry task_id; error lines carry error_code
    - setup_logging is idempotent: re-running the lifespan replaces the
      handler it installed instead of stacking a second one

Design Decisions:
    - Formatter on stdlib logging, configured once from the lifespan
    - uvicorn's own loggers propagate to root so server and app lines share a format
"""

import logging
import json
from datetime import datetime, timezone

from fastapi import Request

SERVICE_NAME = "task-api"

_CONTEXT_KEYS = ("method", "path", "task_id", "error_code")
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
        }
        log.update(_context(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local development, context appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class _TaskApiHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def request_extra(request: Request) -> dict:
    """Logging extras identifying the request being handled."""
    return {"method": request.method, "path": request.url.path}


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, _TaskApiHandler):
            root.removeHandler(existing)

    handler = _TaskApiHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
    return handler


def _context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in _CONTEXT_KEYS
        if record.__dict__.get(key) is not None
    }
