"""Structured logging configuration with request correlation.

Every record is emitted as one JSON line on stdout. Records produced while a
request is being served carry its ``request_id``; the same id is echoed in the
``X-Request-ID`` response header so clients can quote it.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# ``extra=`` keys copied onto the JSON payload when present
EXTRA_KEYS = ("endpoint", "method", "status", "elapsed_ms", "user_id", "outcome")

ACCESS_LOGGER = "users_api.access"


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp the current request id (or ``None``) on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str | None:
    return next(
        (request.headers[name] for name in CORRELATION_HEADERS if request.headers.get(name)),
        None,
    )


def ensure_request_id() -> str:
    """Return the id correlating the current request.

    The first call in a request adopts the caller's ``X-Request-ID`` (or
    ``X-Correlation-ID``) header, falling back to a random UUID, and caches
    it on :data:`flask.g`. Outside a request a fresh UUID is returned.
    """

    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        g.request_id = _incoming_request_id() or str(uuid4())
    return g.request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout as JSON at ``level``.

    Unknown level names fall back to ``INFO``.
    """

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def init_app(app: Flask) -> None:
    """Seed request ids, echo them back and log one access line per request."""

    app.logger.addFilter(RequestIdFilter())
    access_log = logging.getLogger(ACCESS_LOGGER)

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _log_access(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        access_log.info(
            "request.completed",
            extra={
                "method": request.method,
                "endpoint": request.endpoint,
                "status": response.status_code,
            },
        )
        return response


__all__ = ["JSONFormatter", "configure_logging", "ensure_request_id", "init_app"]
