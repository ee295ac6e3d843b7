import json
import logging
import os
import re
import sys
import traceback
from datetime import UTC, datetime
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from ats_api.core.settings import get_settings

_STANDARD_LOG_RECORD_KEYS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys())
_STANDARD_LOG_RECORD_KEYS.update({"message", "asctime"})

_SENSITIVE_KEYS = {
    "authorization",
    "cookie",
    "set-cookie",
    "x-xsrf-token",
    "xsrf",
    "token",
    "password",
    "secret",
    "jwt",
}

_COOKIE_VALUE_RE = re.compile(r"(?i)(authorization=)([^;\s]+)")
_JWT_RE = re.compile(r"\beyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+")


def _sanitize_filename(value: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9._-]+", "_", value.strip().lower())
    return cleaned.strip("._-") or "app"


def _redact_value(value: Any) -> Any:
    """Mask credentials in log payloads.

    Dict keys containing a sensitive fragment are masked entirely; strings
    have refresh cookies and anything shaped like a JWT replaced.
    """
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if any(part in key.lower() for part in _SENSITIVE_KEYS):
                out[key] = "<redacted>"
            else:
                out[key] = _redact_value(v)
        return out

    if isinstance(value, list):
        return [_redact_value(v) for v in value]

    if isinstance(value, tuple):
        return tuple(_redact_value(v) for v in value)

    if isinstance(value, str):
        redacted = _COOKIE_VALUE_RE.sub(r"\1<redacted>", value)
        return _JWT_RE.sub("<redacted-jwt>", redacted)

    return value


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOG_RECORD_KEYS
    }


def _build_error_json_payload(record: logging.LogRecord) -> dict[str, Any]:
    message = _redact_value(record.getMessage())

    exc_type = exc_value = exc_tb = None
    if record.exc_info and len(record.exc_info) == 3:
        exc_type, exc_value, exc_tb = record.exc_info

    stack_trace = None
    if exc_type and exc_value and exc_tb:
        stack_trace = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

    extra = _extract_extra_fields(record)

    payload: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "error_type": exc_type.__name__ if exc_type else "LogError",
        "error_message": str(exc_value) if exc_value else str(message),
        "stack_trace": stack_trace,
        "message": message,
        "context_data": _redact_value(extra) if extra else None,
        "source_file": record.filename,
        "source_line": record.lineno,
        "source_function": record.funcName,
        "process": record.process,
    }

    return {k: v for k, v in payload.items() if v is not None}


class _JsonLineErrorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = _build_error_json_payload(record)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _rotate_jsonl_namer(default_name: str) -> str:
    marker = ".jsonl."
    if marker not in default_name:
        return default_name
    before, after = default_name.split(marker, 1)
    return f"{before}_{after}.jsonl"


def _create_error_jsonl_handler(*, errors_dir: Path, logger_name: str) -> logging.Handler:
    errors_dir.mkdir(parents=True, exist_ok=True)
    prefix = _sanitize_filename(logger_name)
    base_file = errors_dir / f"{prefix}_errors_{os.getpid()}.jsonl"

    handler = TimedRotatingFileHandler(
        filename=str(base_file),
        when="D",
        interval=1,
        backupCount=0,
        encoding="utf-8",
        delay=True,
        utc=True,
    )
    handler.setLevel(logging.ERROR)
    handler.setFormatter(_JsonLineErrorFormatter())
    handler.suffix = "%Y%m%d_%H%M%S"
    handler.namer = _rotate_jsonl_namer
    return handler


@lru_cache
def setup_logging(name: str | None = None, level: str | None = None) -> logging.Logger:
    """
    Configure the root logger once for the whole application.

    Args:
        name: Logger name (defaults to app name from settings)
        level: Log level (defaults to settings.log_level)

    Returns:
        The application logger
    """
    settings = get_settings()
    logger_name = name or settings.app_name
    log_level = getattr(logging, (level or settings.log_level).upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    root_logger.addHandler(
        _create_error_jsonl_handler(
            errors_dir=settings.logs_dir / "errors",
            logger_name=logger_name,
        )
    )

    app_logger = logging.getLogger(logger_name)
    app_logger.setLevel(log_level)
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
