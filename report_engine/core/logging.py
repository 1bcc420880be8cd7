import functools
import json
import logging
import logging.handlers
import socket
import sys
import time
from pathlib import Path
from typing import List, Optional

from .config import Settings, get_settings

PACKAGE_LOGGER = "report_engine"
NOISY_LOGGERS = ("openpyxl", "multipart", "httpx")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with structured fields merged in."""

    def __init__(self, service: str = "report-engine", environment: str = "development", **kwargs):
        super().__init__(**kwargs)
        self.service = service
        self.environment = environment
        try:
            self.hostname = socket.gethostname()
        except OSError:
            self.hostname = "unknown"

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
            "service": self.service,
            "environment": self.environment,
            "hostname": self.hostname,
        }

        fields = getattr(record, "extra_fields", None)
        if fields:
            entry.update(fields)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def _build_formatter(settings: Settings) -> logging.Formatter:
    if settings.logging.json_format:
        return JSONFormatter(service=settings.project_name, environment=settings.environment)
    return logging.Formatter(fmt=settings.logging.format, datefmt="%Y-%m-%d %H:%M:%S")


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.logging.file_path:
        log_file = Path(settings.logging.file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=settings.logging.max_bytes,
                backupCount=settings.logging.backup_count,
                encoding="utf-8",
            )
        )
    return handlers


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the API server and the CLI.

    Args:
        level: Overrides LOG_LEVEL when given
    """
    settings = get_settings()
    level_name = (level or settings.logging.level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = _build_formatter(settings)
    for handler in _build_handlers(settings):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger(PACKAGE_LOGGER).setLevel(root_logger.level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_execution_time(logger: logging.Logger, level: int = logging.INFO):
    """
    Decorator logging how long a call took, as ``duration_ms``.

    Failures are logged at ERROR with the elapsed time and re-raised.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - started
                logger.error(
                    f"{func.__name__} failed after {elapsed:.4f} seconds: {e}",
                    extra={"extra_fields": {"duration_ms": round(elapsed * 1000, 2), "error": type(e).__name__}},
                )
                raise

            elapsed = time.perf_counter() - started
            logger.log(
                level,
                f"{func.__name__} executed in {elapsed:.4f} seconds",
                extra={"extra_fields": {"duration_ms": round(elapsed * 1000, 2)}},
            )
            return result

        return wrapper
    return decorator


class StructuredLogger:
    """Logger wrapper that attaches default and per-call fields to each record."""

    def __init__(self, name: str, **default_fields):
        self.logger = logging.getLogger(name)
        self.default_fields = default_fields

    def bind(self, **fields) -> "StructuredLogger":
        """Copy of this logger with additional default fields."""
        bound = StructuredLogger(self.logger.name, **self.default_fields)
        bound.default_fields.update(fields)
        return bound

    def _log(self, level: int, message: str, **fields):
        self.logger.log(level, message, extra={"extra_fields": {**self.default_fields, **fields}})

    def debug(self, message: str, **fields):
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields):
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields):
        self._log(logging.ERROR, message, **fields)
