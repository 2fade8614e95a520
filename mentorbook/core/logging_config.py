"""
Centralized logging configuration for the booking service.

This module provides structured logging with:
- JSON formatting for production
- Colored console formatting for development
- Optional rotating log files
- Request/response logging with a per-request id

Usage:
    from mentorbook.core.logging_config import setup_logging, get_logger

    # In the application factory
    setup_logging(app, log_level="INFO")

    # In any module
    logger = get_logger(__name__)
    logger.info("Booking created", extra={"context": {"booking_id": "..."}})
"""

import json
import logging
import logging.handlers
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flask import Flask, g, request

LOG_DIR = Path.cwd() / "logs"


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs as JSON with timestamp, level, message, and extra context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = getattr(record, "context", {})

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        original = record.levelname
        record.levelname = f"{color}{original:8}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            # Other handlers share the record
            record.levelname = original
        context = getattr(record, "context", None)
        if context:
            message = f"{message} | {json.dumps(context, default=str)}"
        return message


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _add_file_handlers(root_logger: logging.Logger, level: int) -> None:
    """Attach rotating JSON file handlers; console-only if the disk refuses."""
    file_formatter = JSONFormatter()
    targets = (
        ("mentorbook.log", level),
        ("mentorbook_errors.log", logging.ERROR),
    )
    try:
        LOG_DIR.mkdir(exist_ok=True)
    except OSError as e:
        root_logger.warning(
            f"Failed to create logs directory: {e}. Logging will only go to console.",
            extra={"context": {"component": "logging_setup"}},
        )
        return

    for filename, handler_level in targets:
        try:
            handler = logging.handlers.RotatingFileHandler(
                LOG_DIR / filename,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
        except OSError as e:
            root_logger.warning(
                f"Failed to create file handler for {filename}: {e}",
                extra={"context": {"component": "logging_setup"}},
            )
            continue
        handler.setLevel(handler_level)
        handler.setFormatter(file_formatter)
        root_logger.addHandler(handler)


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def log_request():
        g.request_start_time = time.time()
        g.request_id = uuid.uuid4().hex[:12]
        g.route = request.url_rule.rule if request.url_rule is not None else request.path

        logging.getLogger("mentorbook.request").info(
            f"{request.method} {request.path}",
            extra={
                "context": {
                    "request_id": g.request_id,
                    "method": request.method,
                    "path": request.path,
                    "route": g.route,
                    "view_args": request.view_args or {},
                    "remote_addr": request.remote_addr,
                }
            },
        )

    @app.after_request
    def log_response(response):
        if hasattr(g, "request_start_time"):
            duration_ms = (time.time() - g.request_start_time) * 1000
            logging.getLogger("mentorbook.response").info(
                f"{request.method} {request.path} {response.status_code} in {duration_ms:.2f}ms",
                extra={
                    "context": {
                        "request_id": g.get("request_id"),
                        "method": request.method,
                        "path": request.path,
                        "status_code": response.status_code,
                        "duration_ms": round(duration_ms, 2),
                    }
                },
            )
        return response


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    log_to_file: bool = False,
    use_json_format: bool = False,
) -> None:
    """
    Configure logging for the Flask application.

    Args:
        app: Flask application instance (required for request/response hooks)
        log_level: Logging level (int like logging.INFO or string "INFO")
        log_to_file: Write logs to rotating files under ./logs
        use_json_format: Use JSON format instead of console format
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if use_json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ConsoleFormatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root_logger.addHandler(console_handler)

    if log_to_file:
        _add_file_handlers(root_logger, level)

    if app is not None:
        _register_request_hooks(app)

    # Suppress noisy third-party loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    get_logger("mentorbook").info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"log_to_file={log_to_file}, json_format={use_json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Example:
        logger = get_logger(__name__)
        logger.info("User logged in", extra={"context": {"user_id": "..."}})
    """
    return logging.getLogger(name)
