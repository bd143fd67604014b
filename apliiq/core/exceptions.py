from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """Categorization of errors surfaced to callers."""
    VALIDATION = "validation"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class ApliiqError(Exception):
    """
    Base exception for every failure surfaced by the client.

    Instances are built by the error mapper; other components report
    failures through results or transport exceptions.
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(self, message: str, status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent reporting."""
        return {
            "error": {
                "category": self.category.value,
                "message": self.message,
                "status_code": self.status_code,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code})"


class ValidationError(ApliiqError):
    """Raised when a payload fails schema or business-rule validation."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str = "Validation failed", details: Optional[Any] = None):
        super().__init__(message, status_code=400, details=details)


class TransportError(ApliiqError):
    """Raised when the upstream call fails or returns a non-success status."""

    category = ErrorCategory.TRANSPORT

    def __init__(
        self,
        message: str = "Request failed",
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, status_code=status_code or 500, details=details)


class UnknownError(ApliiqError):
    """Fallback for failures that fit no other category."""

    category = ErrorCategory.UNKNOWN

    def __init__(self, message: str = "Unknown error occurred", details: Optional[Any] = None):
        super().__init__(message, status_code=500, details=details)


class ConfigurationError(ValueError):
    """Raised for invalid client configuration, before any network I/O."""
