import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

# Context variable for tracking a single outbound call across log records
request_id: ContextVar[str] = ContextVar("request_id", default="")


class StructuredLogFormatter(logging.Formatter):
    """
    Custom formatter for structured JSON logs.

    Creates a JSON-formatted log entry with standardized fields like
    timestamp, log level, message, request ID, etc.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        req_id = getattr(record, "request_id", "") or request_id.get()
        if req_id:
            log_data["request_id"] = req_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        # Extra data passed as ``extra={"data": {...}}``
        if hasattr(record, "data") and isinstance(record.data, dict):
            log_data.update(record.data)

        return json.dumps(log_data, default=str)


class RequestContextFilter(logging.Filter):
    """Injects the current request ID into every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id.get()
        return True


def configure_logging(level: Optional[str] = None, structured: Optional[bool] = None) -> None:
    """
    Configure logging for the ``apliiq`` logger hierarchy.

    The root logger is left alone so that embedding applications keep
    control of their own handlers.

    Args:
        level: Log level name. Defaults to the ``APLIIQ_LOG_LEVEL`` setting.
        structured: Emit JSON records. Defaults to ``APLIIQ_STRUCTURED_LOGGING``.
    """
    if level is None or structured is None:
        from apliiq.core.config import get_settings

        settings = get_settings()
        level = level or settings.log_level
        structured = settings.structured_logging if structured is None else structured

    log_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger("apliiq")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    if structured:
        formatter = StructuredLogFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] [%(request_id)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name, typically the module name

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)


def set_request_id(req_id: Optional[str] = None) -> str:
    """
    Set the request ID for the current context.

    Args:
        req_id: Request ID to set. If None, a new UUID is generated.

    Returns:
        str: The request ID that was set
    """
    req_id = req_id or uuid.uuid4().hex
    request_id.set(req_id)
    return req_id
