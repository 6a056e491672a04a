"""Structured Logging — JSON formatter, setup, and per-request access logging.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (request_id, user_id, error_code, ...) surfaced when present
    - Every log line emitted while serving a request carries that request's id
    - Every response carries X-Request-ID
    - JSON format in production, human-readable in development

Design Decisions:
    - request_id held in a ContextVar: no need to thread it through call signatures
    - setup_logging called once on startup via lifespan
"""

import json
import logging
import secrets
import time
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse

from gym_tracker.core.errors import InternalError

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("gym_tracker.access")

_EXTRA_FIELDS = (
    "request_id", "user_id", "error_code", "method", "path",
    "status_code", "duration_ms", "user_agent",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = record.__dict__.get("request_id") or request_id_var.get()
        if request_id:
            log["request_id"] = request_id
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None and key not in log:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


def generate_request_id() -> str:
    """Ids look like req-<epoch ms>-<9 random chars>."""
    return f"req-{int(time.time() * 1000)}-{secrets.token_hex(5)[:9]}"


async def log_requests(request: Request, call_next):
    """HTTP middleware: tag the request with an id and log it once answered.

    Exceptions that escape every handler are answered here with the generic
    500 envelope, so failed requests still carry their id and get an access line.
    """
    request_id = generate_request_id()
    token = request_id_var.set(request_id)
    request.state.request_id = request_id
    start = time.perf_counter()
    try:
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Unhandled exception on {request.url.path}: {e}",
                exc_info=True,
            )
            response = JSONResponse(
                status_code=500, content=InternalError().to_response(),
            )
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        access_logger.info(
            f"{request.method} {request.url.path} {response.status_code} - {elapsed_ms}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
                "user_agent": request.headers.get("user-agent", "Unknown"),
            },
        )
        return response
    finally:
        request_id_var.reset(token)
