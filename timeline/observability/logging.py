"""
Structured logging with request id propagation.

JSON lines when stderr is not a terminal (servers, pipes), a short human
format otherwise.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from timeline import config

from .context import RequestContext, get_request_id

# LogRecord attributes that are not user-supplied "extra" fields
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys() | {"message", "taskName"}
)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line:

    {"timestamp": "2026-10-19T07:30:00.000Z", "level": "INFO",
     "logger": "timeline.engine.ledger", "message": "Placed habit ...",
     "request_id": "req-...", ...extra}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            log_obj["request_id"] = request_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_obj[key] = value

        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """Readable single-line format for local use."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        request_id = get_request_id()
        rid_str = f"[{request_id[:12]}] " if request_id else ""
        line = f"{timestamp} [{record.levelname}] {record.name}: {rid_str}{record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str | None = None, json_format: bool | None = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name. Defaults to DAY_TIMELINE_LOG_LEVEL.
        json_format: Force JSON output. None = DAY_TIMELINE_LOG_JSON, else
            JSON when stderr is not a TTY.
    """
    level = level or config.LOG_LEVEL
    if json_format is None:
        if config.LOG_JSON is not None:
            json_format = config.LOG_JSON == "1"
        else:
            json_format = not sys.stderr.isatty()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    root_logger.addHandler(handler)


class CorrelationIdMiddleware:
    """
    ASGI middleware: run each HTTP request inside a RequestContext.

    Honors an incoming X-Request-ID header and echoes the id back on the
    response.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for key, value in scope.get("headers", []):
            if key.lower() == b"x-request-id":
                request_id = value.decode("latin-1")
                break

        async def send_with_id(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", ctx.request_id.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        with RequestContext(request_id=request_id) as ctx:
            await self.app(scope, receive, send_with_id)
