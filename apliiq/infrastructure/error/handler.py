"""
Error mapping for the Apliiq client.
Every failure leaving a public client operation passes through here.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel

from apliiq.core.exceptions import (
    ApliiqError,
    ErrorCategory,
    TransportError,
    UnknownError,
    ValidationError,
)
from apliiq.core.result import Err
from apliiq.infrastructure.http.transport import TransportFailure

default_logger = logging.getLogger(__name__)


class ErrorDetails(BaseModel):
    """Structured error details for logging and notification."""
    timestamp: datetime
    category: ErrorCategory
    message: str
    source: str
    http_status_code: int


class ErrorMapper:
    """
    Maps validation results, transport failures and anything unexpected
    onto the ``ApliiqError`` taxonomy, logging each mapped error.

    Priority: validation, then transport, then unknown.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        notify_callback: Optional[Callable[[ErrorDetails], None]] = None,
    ):
        """
        Initialize the error mapper.

        Args:
            logger: Logger for mapped errors
            notify_callback: Optional hook invoked with every mapped error
        """
        self.logger = logger or default_logger
        self.notify_callback = notify_callback

        self.log_levels = {
            ErrorCategory.VALIDATION: logging.INFO,
            ErrorCategory.TRANSPORT: logging.WARNING,
            ErrorCategory.UNKNOWN: logging.ERROR,
        }

    def from_violations(self, result: Err, source: str) -> ValidationError:
        """
        Build a ValidationError listing every violation.

        Args:
            result: Failed validation or normalization result
            source: Operation that produced it, e.g. "get_product"

        Returns:
            ValidationError: With all messages comma-joined
        """
        error = ValidationError(
            f"Validation failed: {', '.join(result.messages)}",
            details=[violation.to_dict() for violation in result.violations],
        )
        self._report(error, source)
        return error

    def map_exception(self, exception: BaseException, source: str) -> ApliiqError:
        """
        Map any exception to an ApliiqError.

        Args:
            exception: The exception that occurred
            source: Operation that raised it

        Returns:
            ApliiqError: The error to raise to the caller
        """
        if isinstance(exception, ApliiqError):
            return exception

        if isinstance(exception, TransportFailure):
            error: ApliiqError = TransportError(
                self._transport_message(exception.body, exception.message),
                status_code=exception.status,
                details=exception.body,
            )
        elif isinstance(exception, httpx.HTTPError):
            error = TransportError(str(exception) or type(exception).__name__)
        else:
            error = UnknownError(details={"type": type(exception).__name__, "error": str(exception)})

        self._report(error, source, exc_info=exception if isinstance(error, UnknownError) else None)
        return error

    @staticmethod
    def _transport_message(body: Any, fallback: str) -> str:
        if isinstance(body, dict):
            message = body.get("message") or body.get("Message")
            if isinstance(message, str) and message:
                return message
        return fallback

    def _report(self, error: ApliiqError, source: str, exc_info: Optional[BaseException] = None) -> None:
        details = ErrorDetails(
            timestamp=datetime.now(timezone.utc),
            category=error.category,
            message=error.message,
            source=source,
            http_status_code=error.status_code,
        )
        self.logger.log(
            self.log_levels[error.category],
            f"{source} failed: {error.message}",
            extra={"data": details.model_dump(mode="json", exclude={"timestamp", "message"})},
            exc_info=exc_info,
        )
        if self.notify_callback:
            try:
                self.notify_callback(details)
            except Exception as e:
                # Log but don't raise if notification itself fails
                self.logger.error(f"Failed to send error notification: {str(e)}")
