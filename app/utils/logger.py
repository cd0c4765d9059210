"""
Logging configuration for structured text logging.
"""
import logging
import sys
from typing import Any, Dict
from app.config import settings


# Attributes every LogRecord carries; anything else was passed as a structured field
_RECORD_ATTRIBUTES = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
})


class StructuredFormatter(logging.Formatter):
    """Formats records as `timestamp | LEVEL | logger | message | key=value ...`."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        line = f"{timestamp}.{int(record.msecs):03d} | {record.levelname:8} | {record.name} | {record.getMessage()}"

        fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        }
        if fields:
            line += " | " + " ".join(f"{k}={_format_value(v)}" for k, v in fields.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def _format_value(value: Any) -> str:
    """Quote string values containing whitespace so key=value pairs stay parseable."""
    text = str(value)
    if isinstance(value, str) and (not text or any(ch.isspace() for ch in text)):
        return repr(text)
    return text


def setup_logging() -> logging.Logger:
    """
    Configure and return the application logger.

    Supports per-module log level configuration via environment variables:
    - APP_LOG_LEVEL: Application logs (default: LOG_LEVEL)
    - UVICORN_LOG_LEVEL: Uvicorn logs (default: INFO)
    - HTTPX_LOG_LEVEL: HTTPX logs, used by the spell-check backends (default: WARNING)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("app")
    app_log_level = (settings.APP_LOG_LEVEL or settings.LOG_LEVEL).upper()
    logger.setLevel(getattr(logging, app_log_level))

    # Remove existing handlers to avoid duplicates on reload
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, app_log_level))
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    logger.propagate = False

    log_config = _configure_third_party_loggers()

    print("=" * 60)
    print("LOG CONFIGURATION")
    print("=" * 60)
    print(f"{'APP_LOG_LEVEL:':20} {app_log_level}")
    for lib_name, level in log_config.items():
        print(f"{lib_name:20} {level}")
    print("=" * 60)

    return logger


def _configure_third_party_loggers() -> Dict[str, str]:
    """
    Configure log levels for third-party libraries.

    Returns:
        Dictionary mapping setting names to configured levels
    """
    levels = {
        "UVICORN_LOG_LEVEL": ((settings.UVICORN_LOG_LEVEL or "INFO").upper(), ["uvicorn", "uvicorn.access"]),
        "HTTPX_LOG_LEVEL": ((settings.HTTPX_LOG_LEVEL or "WARNING").upper(), ["httpx", "httpcore"]),
    }

    config = {}
    for setting_name, (level, logger_names) in levels.items():
        for logger_name in logger_names:
            logging.getLogger(logger_name).setLevel(getattr(logging, level))
        config[f"{setting_name}:"] = level

    return config


class StructuredLogger:
    """Wrapper around logging.Logger that supports keyword arguments for structured logging."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _log(self, level: int, msg: str, *args, **kwargs):
        exc_info = kwargs.pop("exc_info", False)

        # Fields colliding with LogRecord attributes are prefixed with 'ctx_'
        extra = {
            (f"ctx_{key}" if key in _RECORD_ATTRIBUTES else key): value
            for key, value in kwargs.items()
        }

        self._logger.log(level, msg, *args, extra=extra, exc_info=exc_info, stacklevel=3)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs):
        self._log(logging.CRITICAL, msg, *args, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger with the specified name under the app namespace.

    Args:
        name: Logger name (will be prefixed with 'app.')

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(f"app.{name}"))


# Initialize application logger
app_logger = setup_logging()
