"""
Structured JSON logging.

Log lines are single JSON objects on stdout, using Google Cloud Logging
severity names, with request correlation taken from the Flask context.
"""

import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, TypeVar

from flask import Flask, g, request


F = TypeVar("F", bound=Callable[..., Any])

SERVICE_NAME = "working-dates"


class JsonFormatter(logging.Formatter):
    """Render log records as Cloud Logging compatible JSON."""

    SEVERITY_MAP = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARNING",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    CONTEXT_ATTRIBUTES = ("request_id", "endpoint")

    SENSITIVE_PATTERNS = frozenset([
        "password", "secret", "token", "api_key", "authorization", "credential",
    ])

    MAX_VALUE_LENGTH = 1000

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "severity": self.SEVERITY_MAP.get(record.levelno, "INFO"),
            "message": record.getMessage(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "logger": record.name,
            "service": SERVICE_NAME,
        }

        self._add_request_context(entry)
        self._add_extra_fields(record, entry)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        if record.levelno >= logging.WARNING:
            entry["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(entry, ensure_ascii=False, default=str)

    def _add_request_context(self, entry: Dict[str, Any]) -> None:
        try:
            for attr in self.CONTEXT_ATTRIBUTES:
                value = g.get(attr)
                if value:
                    entry[attr] = value
        except RuntimeError:
            pass  # Outside Flask context

    def _add_extra_fields(self, record: logging.LogRecord, entry: Dict[str, Any]) -> None:
        extra_fields = getattr(record, "extra_fields", None)
        if not extra_fields:
            return
        for key, value in extra_fields.items():
            if any(pattern in key.lower() for pattern in self.SENSITIVE_PATTERNS):
                continue
            if isinstance(value, str) and len(value) > self.MAX_VALUE_LENGTH:
                value = value[:self.MAX_VALUE_LENGTH] + "... [truncated]"
            entry[key] = value


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter merging bound fields with per-call ``extra_fields``."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        extra_fields = extra.pop("extra_fields", {})

        if self.extra:
            extra_fields = {**self.extra, **extra_fields}

        kwargs["extra"] = {**extra, "extra_fields": extra_fields}
        return msg, kwargs

    def with_fields(self, **fields: Any) -> "StructuredLogger":
        """Create a new logger with additional bound fields."""
        return StructuredLogger(self.logger, {**self.extra, **fields})


def get_logger(name: str = SERVICE_NAME) -> StructuredLogger:
    """
    Create (once) and return a structured JSON logger.

    Args:
        name: Logger name.

    Returns:
        StructuredLogger wrapping the named logger.
    """
    base_logger = logging.getLogger(name)

    if not base_logger.handlers:
        base_logger.setLevel(logging.DEBUG)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(JsonFormatter())

        base_logger.addHandler(handler)
        base_logger.propagate = False

    return StructuredLogger(base_logger, {})


def log_request_context(app: Flask) -> None:
    """
    Register hooks that tag each request with an id and log its outcome.

    Args:
        app: Flask application instance.
    """
    @app.before_request
    def before_request() -> None:
        trace_header = request.headers.get("X-Cloud-Trace-Context", "")
        g.request_id = trace_header.split("/")[0] or uuid.uuid4().hex[:8]
        g.endpoint = request.endpoint
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration_ms = None
        if "start_time" in g:
            duration_ms = int((time.time() - g.start_time) * 1000)

        get_logger("request").info(
            f"{request.method} {request.full_path.rstrip('?')} -> {response.status_code}",
            extra={"extra_fields": {
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }}
        )

        return response


def log_duration(operation: str) -> Callable[[F], F]:
    """
    Decorator logging how long an operation took and whether it failed.

    Args:
        operation: Operation name for logging.
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            op_logger = get_logger(func.__module__)
            start = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                op_logger.error(
                    f"{operation} failed: {e}",
                    extra={"extra_fields": {
                        "operation": operation,
                        "duration_ms": int((time.time() - start) * 1000),
                        "status": "error",
                        "error_type": type(e).__name__,
                    }}
                )
                raise
            op_logger.debug(
                f"{operation} completed",
                extra={"extra_fields": {
                    "operation": operation,
                    "duration_ms": int((time.time() - start) * 1000),
                    "status": "success",
                }}
            )
            return result
        return wrapper  # type: ignore
    return decorator


# Global application logger
logger = get_logger()
